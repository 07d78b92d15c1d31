"""
SEPA XML

Builds SEPA payment initiation documents (pain.001 credit transfers and
pain.008 direct debits) and serializes them to the ISO 20022 XML layout of
the chosen pain format. Also provides mod-97 check digit helpers for IBANs
and SEPA creditor identifiers.

Example usage:
    from sepa_xml import SEPADocument, SEPAParty

    doc = SEPADocument("pain.001.001.03", message_id="MSG1",
                       initiator_name="ACME Corp")
    info = doc.create_payment_info()
    info.requested_execution_date = date(2024, 3, 1)
    info.debtor = SEPAParty(name="ACME Corp", iban="DE87123456781234567890")
    doc.add_payment_info(info)

    txn = info.create_transaction()
    txn.amount = Decimal("10.00")
    txn.creditor = SEPAParty(name="Supplier", iban="...")
    info.add_transaction(txn)

    print(doc.to_string())
"""

from typing import List

from sepa_xml.core.config import SEPAConfig
from sepa_xml.core.exceptions import (
    ConfigurationException,
    MissingRequiredTemporalException,
    SEPAXMLException,
    TypeMismatchException,
    UnknownFormatException,
)
from sepa_xml.protocols.pain import (
    PainBuilder,
    PaymentInfo,
    PaymentMethod,
    SEPADocument,
    SEPAParty,
    Transaction,
    resolve_format,
    serialize,
)
from sepa_xml.validators import (
    PainDocumentValidator,
    checksum_creditor_id,
    checksum_iban,
    validate_creditor_id,
    validate_iban,
)

__version__ = "1.0.0"

__all__: List[str] = [
    "SEPAConfig",
    "SEPAXMLException",
    "ConfigurationException",
    "MissingRequiredTemporalException",
    "TypeMismatchException",
    "UnknownFormatException",
    "PainBuilder",
    "PaymentInfo",
    "PaymentMethod",
    "SEPADocument",
    "SEPAParty",
    "Transaction",
    "resolve_format",
    "serialize",
    "PainDocumentValidator",
    "checksum_creditor_id",
    "checksum_iban",
    "validate_creditor_id",
    "validate_iban",
]
