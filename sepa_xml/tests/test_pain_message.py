"""
Tests for the SEPA document model
"""

import pytest
from datetime import date, datetime
from decimal import Decimal

from sepa_xml.core.config import SEPAConfig
from sepa_xml.core.exceptions import TypeMismatchException, UnknownFormatException
from sepa_xml.protocols.pain.pain_codes import PaymentMethod
from sepa_xml.protocols.pain.pain_message import (
    PaymentInfo,
    SEPADocument,
    SEPAParty,
    Transaction,
    to_cents,
    to_decimal,
)


class TestSEPAParty:
    """Tests for SEPAParty."""

    def test_full_address(self):
        """Test complete address detection."""
        party = SEPAParty(name="ACME", street="Main St 1", city="Berlin", country="DE")
        assert party.has_postal_address is True
        assert party.has_partial_address is False

    def test_partial_address(self):
        """Test partial address detection."""
        party = SEPAParty(name="ACME", street="Main St 1", country="DE")
        assert party.has_postal_address is False
        assert party.has_partial_address is True

    def test_no_address(self):
        """Test party without any address."""
        party = SEPAParty(name="ACME")
        assert party.has_postal_address is False
        assert party.has_partial_address is False


class TestDocument:
    """Tests for SEPADocument."""

    def test_default_format(self):
        """Test documents default to pain.008.001.02."""
        doc = SEPADocument(message_id="MSG1")
        assert doc.pain_format == "pain.008.001.02"
        assert doc.root_tag == "CstmrDrctDbtInitn"
        assert doc.method is PaymentMethod.DIRECT_DEBIT

    def test_default_format_from_config(self):
        """Test the configured default format is used."""
        doc = SEPADocument(config=SEPAConfig(default_pain_format="pain.001.001.03"))
        assert doc.pain_format == "pain.001.001.03"
        assert doc.method is PaymentMethod.TRANSFER

    def test_unknown_format(self):
        """Test construction with an unregistered format."""
        with pytest.raises(UnknownFormatException):
            SEPADocument("pain.001.001.99")

    def test_header_fields(self):
        """Test header is filled from constructor arguments."""
        created = datetime(2024, 1, 2, 3, 4, 5)
        doc = SEPADocument(message_id="MSG1", created=created, initiator_name="ACME")
        assert doc.grp_hdr.id == "MSG1"
        assert doc.grp_hdr.created == created
        assert doc.grp_hdr.initiator_name == "ACME"
        assert doc.grp_hdr.grouping == "MIXD"
        assert doc.grp_hdr.batch_booking is False

    def test_instances_do_not_share_batches(self):
        """Test each document owns its own batch list."""
        first = SEPADocument(message_id="A")
        second = SEPADocument(message_id="B")
        first.add_payment_info(first.create_payment_info())

        assert len(first.payment_infos) == 1
        assert len(second.payment_infos) == 0

    def test_create_payment_info_is_bound(self):
        """Test the factory binds format and method."""
        doc = SEPADocument("pain.001.003.03", message_id="MSG1")
        info = doc.create_payment_info()
        assert info.pain_format == "pain.001.003.03"
        assert info.method is PaymentMethod.TRANSFER


class TestIdAssignment:
    """Tests for batch and transaction id assignment."""

    def test_generated_ids(self):
        """Test ids built from header id and indexes."""
        doc = SEPADocument(message_id="MSG1")
        info = doc.create_payment_info()
        doc.add_payment_info(info)
        assert info.id == "MSG1.0"

        txn = info.create_transaction()
        info.add_transaction(txn)
        assert txn.id == "MSG1.0.0"

        second = info.create_transaction()
        info.add_transaction(second)
        assert second.id == "MSG1.0.1"

    def test_second_batch_index(self):
        """Test the batch index counts attached batches."""
        doc = SEPADocument(message_id="MSG1")
        doc.add_payment_info(doc.create_payment_info())
        info = doc.create_payment_info()
        doc.add_payment_info(info)
        assert info.id == "MSG1.1"

    def test_explicit_batch_id_is_prefixed(self):
        """Test an explicit batch id gets the header id prefix."""
        doc = SEPADocument(message_id="MSG1")
        info = doc.create_payment_info()
        info.id = "RENT"
        doc.add_payment_info(info)
        assert info.id == "MSG1.RENT"

    def test_explicit_transaction_id_is_kept(self):
        """Test an explicit transaction id is not prefixed."""
        doc = SEPADocument(message_id="MSG1")
        info = doc.create_payment_info()
        doc.add_payment_info(info)

        txn = info.create_transaction()
        txn.id = "MY-TXN"
        info.add_transaction(txn)
        assert txn.id == "MY-TXN"

    def test_transaction_id_truncated(self):
        """Test transaction ids are cut to 35 characters."""
        doc = SEPADocument(message_id="M" * 34)
        info = doc.create_payment_info()
        doc.add_payment_info(info)

        txn = info.create_transaction()
        info.add_transaction(txn)
        assert len(txn.id) == 35

        explicit = info.create_transaction()
        explicit.id = "X" * 50
        info.add_transaction(explicit)
        assert explicit.id == "X" * 35

    def test_custom_separator(self):
        """Test the configured separator is used."""
        doc = SEPADocument(message_id="MSG1", config=SEPAConfig(id_separator="-"))
        info = doc.create_payment_info()
        doc.add_payment_info(info)
        txn = info.create_transaction()
        info.add_transaction(txn)

        assert info.id == "MSG1-0"
        assert txn.id == "MSG1-0-0"

    def test_separators_do_not_interfere(self):
        """Test two documents with different separators."""
        dotted = SEPADocument(message_id="A")
        dashed = SEPADocument(message_id="B", config=SEPAConfig(id_separator="_"))

        dotted_info = dotted.create_payment_info()
        dashed_info = dashed.create_payment_info()
        dashed.add_payment_info(dashed_info)
        dotted.add_payment_info(dotted_info)

        assert dotted_info.id == "A.0"
        assert dashed_info.id == "B_0"

    def test_config_change_is_not_retroactive(self):
        """Test ids assigned earlier keep their separator."""
        config = SEPAConfig()
        doc = SEPADocument(message_id="MSG1", config=config)
        info = doc.create_payment_info()
        doc.add_payment_info(info)

        config.id_separator = "/"
        second = doc.create_payment_info()
        doc.add_payment_info(second)

        assert info.id == "MSG1.0"
        assert second.id == "MSG1.1"

    def test_standalone_batch_uses_document_separator(self):
        """Test a batch built outside the factory adopts the document separator."""
        doc = SEPADocument(message_id="MSG1", config=SEPAConfig(id_separator=":"))
        info = PaymentInfo("pain.008.001.02")
        doc.add_payment_info(info)
        txn = Transaction("pain.008.001.02")
        info.add_transaction(txn)

        assert info.id == "MSG1:0"
        assert txn.id == "MSG1:0:0"


class TestTypeChecks:
    """Tests for add operations rejecting wrong kinds."""

    def test_add_non_payment_info(self):
        """Test adding something that is not a PaymentInfo."""
        doc = SEPADocument(message_id="MSG1")
        with pytest.raises(TypeMismatchException) as exc_info:
            doc.add_payment_info("not a batch")

        assert exc_info.value.error_code == "TYPE_MISMATCH"
        assert len(doc.payment_infos) == 0

    def test_add_transaction_as_payment_info(self):
        """Test adding a Transaction to a document."""
        doc = SEPADocument(message_id="MSG1")
        with pytest.raises(TypeMismatchException):
            doc.add_payment_info(Transaction("pain.008.001.02"))

    def test_add_payment_info_of_other_method(self):
        """Test adding a transfer batch to a direct debit document."""
        doc = SEPADocument("pain.008.001.02", message_id="MSG1")
        with pytest.raises(TypeMismatchException):
            doc.add_payment_info(PaymentInfo("pain.001.001.03"))

    def test_add_non_transaction(self):
        """Test adding something that is not a Transaction."""
        info = PaymentInfo("pain.008.001.02")
        with pytest.raises(TypeMismatchException):
            info.add_transaction({"amount": 1})

    def test_add_transaction_of_other_method(self):
        """Test adding a transfer transaction to a direct debit batch."""
        info = PaymentInfo("pain.008.001.02")
        with pytest.raises(TypeMismatchException):
            info.add_transaction(Transaction("pain.001.001.03"))
        assert len(info.transactions) == 0


class TestParties:
    """Tests for acting party and counterparty selection."""

    def test_direct_debit_parties(self):
        """Test creditor acts, debtor is the counterparty."""
        info = PaymentInfo("pain.008.001.02")
        txn = Transaction("pain.008.001.02")
        assert info.acting_party is info.creditor
        assert txn.counterparty is txn.debtor

    def test_transfer_parties(self):
        """Test debtor acts, creditor is the counterparty."""
        info = PaymentInfo("pain.001.001.03")
        txn = Transaction("pain.001.001.03")
        assert info.acting_party is info.debtor
        assert txn.counterparty is txn.creditor

    def test_parties_not_shared(self):
        """Test each instance gets fresh party blocks."""
        first = Transaction("pain.008.001.02")
        second = Transaction("pain.008.001.02")
        first.debtor.name = "Changed"
        assert second.debtor.name == ""


class TestNormalize:
    """Tests for control sum and count aggregation."""

    def _document(self):
        doc = SEPADocument(message_id="MSG1")
        info = doc.create_payment_info()
        doc.add_payment_info(info)
        for amount in (Decimal("10.00"), Decimal("5.50")):
            txn = info.create_transaction()
            txn.amount = amount
            info.add_transaction(txn)
        return doc, info

    def test_totals(self):
        """Test header totals after normalize."""
        doc, info = self._document()
        doc.normalize()

        assert doc.grp_hdr.control_sum == Decimal("15.50")
        assert doc.grp_hdr.transaction_count == 2
        assert info.control_sum == Decimal("15.50")
        assert info.transaction_count == 2

    def test_totals_use_rounded_amounts(self):
        """Test sums are built from amounts rounded to cents."""
        doc, info = self._document()
        for txn in info.transactions:
            txn.amount = Decimal("0.005")
        doc.normalize()

        assert info.control_sum == Decimal("0.02")
        assert doc.grp_hdr.control_sum == Decimal("0.02")

    def test_idempotent(self):
        """Test normalizing twice gives the same totals."""
        doc, _ = self._document()
        doc.normalize()
        doc.normalize()

        assert doc.grp_hdr.control_sum == Decimal("15.50")
        assert doc.grp_hdr.transaction_count == 2

    def test_manual_totals_are_overwritten(self):
        """Test totals set by hand are replaced."""
        doc, _ = self._document()
        doc.grp_hdr.control_sum = Decimal("999")
        doc.grp_hdr.transaction_count = 42
        doc.normalize()

        assert doc.grp_hdr.control_sum == Decimal("15.50")
        assert doc.grp_hdr.transaction_count == 2

    def test_batch_totals_not_updated_automatically(self):
        """Test batch totals only change on normalize."""
        _, info = self._document()
        assert info.control_sum == Decimal("0")
        assert info.transaction_count == 0

        info.normalize()
        assert info.control_sum == Decimal("15.50")

    def test_multiple_batches(self):
        """Test totals across batches."""
        doc, _ = self._document()
        other = doc.create_payment_info()
        doc.add_payment_info(other)
        txn = other.create_transaction()
        txn.amount = Decimal("0.25")
        other.add_transaction(txn)

        doc.normalize()
        assert doc.grp_hdr.control_sum == Decimal("15.75")
        assert doc.grp_hdr.transaction_count == 3

    def test_empty_document(self):
        """Test an empty document normalizes to zero."""
        doc = SEPADocument(message_id="MSG1")
        doc.normalize()
        assert doc.grp_hdr.control_sum == Decimal("0")
        assert doc.grp_hdr.transaction_count == 0

    def test_float_amounts(self):
        """Test float amounts are summed without binary artifacts."""
        doc = SEPADocument(message_id="MSG1")
        info = doc.create_payment_info()
        doc.add_payment_info(info)
        for amount in (0.1, 0.2):
            txn = info.create_transaction()
            txn.amount = amount
            info.add_transaction(txn)

        doc.normalize()
        assert doc.grp_hdr.control_sum == Decimal("0.3")


class TestTransaction:
    """Tests for Transaction."""

    def test_defaults(self):
        """Test default field values."""
        txn = Transaction("pain.008.001.02")
        assert txn.currency == "EUR"
        assert txn.amount == Decimal("0")
        assert txn.purpose_code is None
        assert txn.method is PaymentMethod.DIRECT_DEBIT

    def test_amount_coerced(self):
        """Test constructor amounts become Decimal."""
        txn = Transaction("pain.001.001.03", amount=12.5)
        assert txn.amount == Decimal("12.5")
        assert to_decimal("3.10") == Decimal("3.10")

    def test_to_dict(self):
        """Test dictionary conversion."""
        txn = Transaction(
            "pain.008.001.02",
            mandate_id="M1",
            mandate_signature_date=date(2023, 1, 15),
        )
        data = txn.to_dict()
        assert data["method"] == "DD"
        assert data["mandate"]["date_of_signature"] == "2023-01-15"
        assert "mandate" not in Transaction("pain.001.001.03").to_dict()

    def test_method_is_read_only(self):
        """Test the payment method cannot be reassigned."""
        txn = Transaction("pain.008.001.02")
        with pytest.raises(AttributeError):
            txn.method = PaymentMethod.TRANSFER
        assert txn.method is PaymentMethod.DIRECT_DEBIT

    def test_batch_method_is_read_only(self):
        """Test a batch keeps the method checked when it was added."""
        doc = SEPADocument("pain.008.001.02", message_id="MSG1")
        info = doc.create_payment_info()
        doc.add_payment_info(info)

        with pytest.raises(AttributeError):
            info.method = PaymentMethod.TRANSFER
        assert doc.payment_infos[0].method is doc.method

    def test_to_cents(self):
        """Test half cents round away from zero."""
        assert to_cents(Decimal("10.125")) == Decimal("10.13")
        assert to_cents(Decimal("-10.125")) == Decimal("-10.13")
        assert to_cents(10.125) == Decimal("10.13")
        assert str(to_cents(7)) == "7.00"
