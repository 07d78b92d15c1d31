"""
SEPA XML - Pytest Configuration and Fixtures
"""

import pytest
from datetime import date, datetime
from decimal import Decimal

from sepa_xml.protocols.pain.pain_message import SEPADocument, SEPAParty


CREDITOR_IBAN = "DE87123456781234567890"
DEBTOR_IBAN = "DE89370400440532013000"
CREDITOR_ID = "DE98ZZZ09999999999"


def make_direct_debit_document(pain_format: str = "pain.008.001.02") -> SEPADocument:
    """Direct debit document with one batch and two transactions."""
    doc = SEPADocument(
        pain_format,
        message_id="MSG1",
        created=datetime(2024, 2, 20, 10, 30, 0),
        initiator_name="ACME Corp",
    )

    info = doc.create_payment_info()
    info.collection_date = date(2024, 3, 1)
    info.creditor_id = CREDITOR_ID
    info.creditor = SEPAParty(
        name="ACME Corp",
        street="Hauptstrasse 1",
        city="10115 Berlin",
        country="DE",
        iban=CREDITOR_IBAN,
        bic="COBADEFFXXX",
    )
    doc.add_payment_info(info)

    for amount, name in ((Decimal("10.00"), "Jane Doe"), (Decimal("5.50"), "John Doe")):
        txn = info.create_transaction()
        txn.end_to_end_id = f"E2E-{name.split()[0].upper()}"
        txn.amount = amount
        txn.mandate_id = f"MANDATE-{name.split()[0].upper()}"
        txn.mandate_signature_date = date(2023, 1, 15)
        txn.remittance_info = "Membership fee"
        txn.debtor = SEPAParty(name=name, iban=DEBTOR_IBAN)
        info.add_transaction(txn)

    return doc


def make_transfer_document(pain_format: str = "pain.001.001.03") -> SEPADocument:
    """Credit transfer document with one batch and one transaction."""
    doc = SEPADocument(
        pain_format,
        message_id="MSG2",
        created=datetime(2024, 2, 20, 10, 30, 0),
        initiator_name="ACME Corp",
    )

    info = doc.create_payment_info()
    info.requested_execution_date = date(2024, 3, 4)
    info.debtor = SEPAParty(name="ACME Corp", iban=CREDITOR_IBAN)
    doc.add_payment_info(info)

    txn = info.create_transaction()
    txn.end_to_end_id = "INV-2024-001"
    txn.amount = Decimal("99.90")
    txn.purpose_code = "SUPP"
    txn.remittance_info = "Invoice 2024-001"
    txn.creditor = SEPAParty(
        name="Supplier GmbH",
        street="Marktplatz 5",
        city="80331 Muenchen",
        country="DE",
        iban=DEBTOR_IBAN,
        bic="COBADEFFXXX",
    )
    info.add_transaction(txn)

    return doc


@pytest.fixture
def direct_debit_document():
    """Create a pain.008.001.02 document."""
    return make_direct_debit_document()


@pytest.fixture
def transfer_document():
    """Create a pain.001.001.03 document."""
    return make_transfer_document()
