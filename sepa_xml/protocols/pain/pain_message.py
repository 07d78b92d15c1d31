"""
SEPA pain Message Data Structures

Core data structures for SEPA payment initiation documents:
- SEPADocument, the root aggregate
- GroupHeader, one per document
- PaymentInfo, a batch of transactions sharing a payment method
- Transaction, a single credit transfer or direct debit instruction
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, List, Optional, Tuple, Union
import logging

from sepa_xml.core.config import SEPAConfig
from sepa_xml.core.exceptions import TypeMismatchException
from sepa_xml.protocols.pain.pain_codes import (
    InstructionPriority,
    PaymentMethod,
    SEPALocalInstrument,
    SEPASequenceType,
    SEPA_CURRENCY,
    SEPA_ID_MAX_LENGTH,
    resolve_format,
)

logger = logging.getLogger(__name__)

AmountLike = Union[Decimal, int, float, str]
CENT = Decimal("0.01")


def to_decimal(value: AmountLike) -> Decimal:
    """Coerce an amount to Decimal without float artifacts."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def to_cents(value: AmountLike) -> Decimal:
    """Round an amount to two decimals, halves away from zero."""
    return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


@dataclass
class SEPAParty:
    """Party information (debtor or creditor)."""

    name: str = ""

    # Address, only written when street, city and country are all present
    street: Optional[str] = None
    city: Optional[str] = None
    country: Optional[str] = None

    # Account and bank
    iban: str = ""
    bic: str = ""

    @property
    def has_postal_address(self) -> bool:
        return bool(self.street and self.city and self.country)

    @property
    def has_partial_address(self) -> bool:
        """Some but not all address lines are set."""
        return not self.has_postal_address and any(
            [self.street, self.city, self.country]
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "street": self.street,
            "city": self.city,
            "country": self.country,
            "iban": self.iban,
            "bic": self.bic,
        }


@dataclass
class GroupHeader:
    """Wrapper for the <GrpHdr> element."""

    id: str = ""
    created: datetime = field(default_factory=datetime.now)
    initiator_name: str = ""

    # Recomputed by SEPADocument.normalize() before every serialization
    transaction_count: int = 0
    control_sum: Decimal = Decimal("0")

    # If true, booking will appear as one entry on the statement
    batch_booking: bool = False

    # Grouping, defines structure handling for the XML file
    grouping: str = "MIXD"


@dataclass
class Transaction:
    """
    Generic transaction.

    The payment method is derived once from the pain format. For transfers
    the counterparty is the creditor, for direct debits the debtor.
    """

    pain_format: str

    # Unique transaction id, generated from the batch id when left empty
    id: str = ""
    end_to_end_id: str = ""

    currency: str = SEPA_CURRENCY
    amount: AmountLike = Decimal("0")

    # Optional ISO 20022 purpose code
    purpose_code: Optional[str] = None

    # Unstructured remittance information
    remittance_info: str = ""

    # Direct debit mandate
    mandate_id: str = ""
    mandate_signature_date: Optional[Union[date, datetime]] = None
    amendment: Optional[str] = None

    debtor: SEPAParty = field(default_factory=SEPAParty)
    creditor: SEPAParty = field(default_factory=SEPAParty)

    _method: PaymentMethod = field(init=False, repr=False)

    def __post_init__(self):
        self._method = resolve_format(self.pain_format).method
        self.amount = to_decimal(self.amount)

    @property
    def method(self) -> PaymentMethod:
        return self._method

    @property
    def counterparty(self) -> SEPAParty:
        """The party on the other side of the batch's acting party."""
        if self.method is PaymentMethod.TRANSFER:
            return self.creditor
        elif self.method is PaymentMethod.DIRECT_DEBIT:
            return self.debtor
        raise TypeMismatchException(f"Unsupported payment method: {self.method}")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        result = {
            "id": self.id,
            "end_to_end_id": self.end_to_end_id,
            "method": self.method.code,
            "amount": str(to_decimal(self.amount)),
            "currency": self.currency,
            "counterparty": self.counterparty.to_dict(),
            "remittance_info": self.remittance_info,
            "purpose_code": self.purpose_code,
        }
        if self.method is PaymentMethod.DIRECT_DEBIT:
            result["mandate"] = {
                "id": self.mandate_id,
                "date_of_signature": (
                    self.mandate_signature_date.isoformat()[:10]
                    if self.mandate_signature_date else None
                ),
                "amendment": self.amendment,
            }
        return result


@dataclass
class PaymentInfo:
    """
    Wrapper for the <PmtInf> element.

    Control sum and transaction count are NOT kept up to date while
    transactions are added; call normalize() (SEPADocument does this before
    serializing).
    """

    pain_format: str

    id: str = ""

    # If true, booking will appear as one entry on your statement
    batch_booking: bool = False

    # Set by normalize()
    transaction_count: int = 0
    control_sum: Decimal = Decimal("0")

    local_instrument: Optional[SEPALocalInstrument] = None
    sequence_type: SEPASequenceType = SEPASequenceType.FRST

    # Exactly one of these is written, depending on the payment method
    collection_date: Optional[Union[date, datetime]] = None
    requested_execution_date: Optional[Union[date, datetime]] = None

    # Creditor scheme identifier, direct debit only
    creditor_id: str = ""

    creditor: SEPAParty = field(default_factory=SEPAParty)
    debtor: SEPAParty = field(default_factory=SEPAParty)

    instruction_priority: InstructionPriority = InstructionPriority.NORM

    id_separator: str = "."

    _method: PaymentMethod = field(init=False, repr=False)
    _transactions: List[Transaction] = field(default_factory=list, init=False, repr=False)

    def __post_init__(self):
        self._method = resolve_format(self.pain_format).method

    @property
    def method(self) -> PaymentMethod:
        """Payment method, fixed by the pain format at construction."""
        return self._method

    @property
    def acting_party(self) -> SEPAParty:
        """The party that owns this batch: creditor for debits, debtor for transfers."""
        if self.method is PaymentMethod.DIRECT_DEBIT:
            return self.creditor
        elif self.method is PaymentMethod.TRANSFER:
            return self.debtor
        raise TypeMismatchException(f"Unsupported payment method: {self.method}")

    @property
    def transactions(self) -> Tuple[Transaction, ...]:
        return tuple(self._transactions)

    def normalize(self) -> None:
        """
        Recompute control sum and transaction count from the transactions.

        Amounts are summed as written, i.e. rounded to cents first.
        """
        self.control_sum = sum(
            (to_cents(txn.amount) for txn in self._transactions), Decimal("0")
        )
        self.transaction_count = len(self._transactions)

    def add_transaction(self, transaction: Transaction) -> None:
        """
        Add a transaction to this batch.

        The transaction id is prefixed by the batch id unless one was set
        explicitly. Either way it is cut to 35 characters.
        """
        if not isinstance(transaction, Transaction):
            raise TypeMismatchException(
                "Given transaction is not a Transaction",
                expected="Transaction",
                actual=type(transaction).__name__,
            )
        if transaction.method is not self.method:
            raise TypeMismatchException(
                "Transaction payment method does not match the batch",
                expected=self.method.code,
                actual=transaction.method.code,
            )

        txn_id = transaction.id or (
            f"{self.id}{self.id_separator}{len(self._transactions)}"
        )
        transaction.id = txn_id[:SEPA_ID_MAX_LENGTH]
        self._transactions.append(transaction)
        logger.debug(f"Added transaction {transaction.id} to batch {self.id}")

    def create_transaction(self) -> Transaction:
        """Create a transaction bound to this batch's pain format."""
        return Transaction(self.pain_format)


class SEPADocument:
    """
    SEPA payment initiation document.

    Example usage:
        doc = SEPADocument("pain.008.001.02", message_id="MSG1",
                           initiator_name="ACME Corp")
        info = doc.create_payment_info()
        info.collection_date = date(2024, 3, 1)
        info.creditor = SEPAParty(name="ACME Corp", iban="DE87123456781234567890")
        doc.add_payment_info(info)

        txn = info.create_transaction()
        txn.amount = Decimal("10.00")
        txn.mandate_signature_date = date(2023, 1, 15)
        info.add_transaction(txn)

        xml = doc.to_string()
    """

    def __init__(
        self,
        pain_format: Optional[str] = None,
        message_id: str = "",
        created: Optional[datetime] = None,
        initiator_name: str = "",
        config: Optional[SEPAConfig] = None,
    ):
        self.config = config or SEPAConfig()
        self._pain_format = pain_format or self.config.default_pain_format
        self._format_info = resolve_format(self._pain_format)
        self._id_separator = self.config.id_separator
        self._payment_infos: List[PaymentInfo] = []

        self.grp_hdr = GroupHeader(id=message_id, initiator_name=initiator_name)
        if created is not None:
            self.grp_hdr.created = created

    @property
    def pain_format(self) -> str:
        return self._pain_format

    @property
    def root_tag(self) -> str:
        return self._format_info.root_tag

    @property
    def method(self) -> PaymentMethod:
        return self._format_info.method

    @property
    def id_separator(self) -> str:
        return self._id_separator

    @property
    def payment_infos(self) -> Tuple[PaymentInfo, ...]:
        return tuple(self._payment_infos)

    def add_payment_info(self, payment_info: PaymentInfo) -> None:
        """
        Add a payment info block. Its id is prefixed with the group header id,
        or becomes the header id plus the block index when empty.
        """
        if not isinstance(payment_info, PaymentInfo):
            raise TypeMismatchException(
                "Given payment is not a PaymentInfo",
                expected="PaymentInfo",
                actual=type(payment_info).__name__,
            )
        if payment_info.method is not self.method:
            raise TypeMismatchException(
                "Payment info method does not match the document",
                expected=self.method.code,
                actual=payment_info.method.code,
            )

        suffix = payment_info.id or str(len(self._payment_infos))
        payment_info.id = f"{self.grp_hdr.id}{self._id_separator}{suffix}"[
            :SEPA_ID_MAX_LENGTH
        ]
        payment_info.id_separator = self._id_separator
        self._payment_infos.append(payment_info)
        logger.debug(f"Added payment info {payment_info.id} to document {self.grp_hdr.id}")

    def create_payment_info(self) -> PaymentInfo:
        """Create a payment info block bound to this document's format."""
        return PaymentInfo(self._pain_format, id_separator=self._id_separator)

    def normalize(self) -> None:
        """
        Recompute control sums and transaction counts bottom-up. Called
        automatically when serialized.
        """
        control_sum = Decimal("0")
        transaction_count = 0
        for payment_info in self._payment_infos:
            payment_info.normalize()
            control_sum += payment_info.control_sum
            transaction_count += payment_info.transaction_count

        self.grp_hdr.control_sum = control_sum
        self.grp_hdr.transaction_count = transaction_count
        logger.debug(
            f"Normalized document {self.grp_hdr.id}: "
            f"{transaction_count} transactions, control sum {control_sum:.2f}"
        )

    def to_xml(self):
        """Serialize this document to an ElementTree element."""
        from sepa_xml.protocols.pain.pain_builder import PainBuilder

        return PainBuilder().build(self)

    def to_string(self) -> str:
        """Serialize this document to an XML string."""
        from sepa_xml.protocols.pain.pain_builder import PainBuilder

        return PainBuilder().to_string(self)

    def __str__(self) -> str:
        return self.to_string()
