"""
SEPA pain Code Definitions

Code definitions for SEPA payment initiation messages including:
- Supported pain formats (the format registry)
- Payment methods
- Sequence types, local instruments and instruction priorities
- Fixed scheme values written into every document
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from sepa_xml.core.exceptions import UnknownFormatException


# ISO 20022 namespaces
ISO20022_NAMESPACE = "urn:iso:std:iso:20022:tech:xsd:"
XSI_NAMESPACE = "http://www.w3.org/2001/XMLSchema-instance"

DEFAULT_PAIN_FORMAT = "pain.008.001.02"

# SEPA Constants
SEPA_CURRENCY = "EUR"
SEPA_SERVICE_LEVEL = "SEPA"
SEPA_CHARGE_BEARER = "SLEV"  # Following Service Level
SEPA_SCHEME_NAME = "SEPA"
SEPA_ID_MAX_LENGTH = 35

# Placeholder emitted when no BIC is known for an agent
BIC_NOT_PROVIDED = "NOTPROVIDED"

CREDIT_TRANSFER_FAMILY = "pain.001"
DIRECT_DEBIT_FAMILY = "pain.008"


class PaymentMethod(Enum):
    """SEPA payment methods (PmtMtd)."""

    TRANSFER = ("TRF", "CdtTrfTxInf", "Credit transfer")
    DIRECT_DEBIT = ("DD", "DrctDbtTxInf", "Direct debit")

    def __init__(self, code: str, transaction_tag: str, description: str):
        self.code = code
        self.transaction_tag = transaction_tag
        self.description = description

    @classmethod
    def from_code(cls, code: str) -> Optional["PaymentMethod"]:
        """Get payment method from code."""
        for method in cls:
            if method.code == code:
                return method
        return None


class PainFormat(Enum):
    """Registered pain formats and the inner root element each one uses."""

    # Credit Transfer Initiation
    PAIN_001_001_02 = ("pain.001.001.02", "pain.001.001.02")
    PAIN_001_003_02 = ("pain.001.003.02", "pain.001.003.02")
    PAIN_001_001_03 = ("pain.001.001.03", "CstmrCdtTrfInitn")
    PAIN_001_002_03 = ("pain.001.002.03", "CstmrCdtTrfInitn")
    PAIN_001_003_03 = ("pain.001.003.03", "CstmrCdtTrfInitn")

    # Direct Debit Initiation
    PAIN_008_001_01 = ("pain.008.001.01", "pain.008.001.01")
    PAIN_008_003_01 = ("pain.008.003.01", "pain.008.003.01")
    PAIN_008_001_02 = ("pain.008.001.02", "CstmrDrctDbtInitn")
    PAIN_008_003_02 = ("pain.008.003.02", "CstmrDrctDbtInitn")

    def __init__(self, code: str, root_element: str):
        self.code = code
        self.root_element = root_element

    @classmethod
    def from_code(cls, code: str) -> Optional["PainFormat"]:
        """Get pain format from its identifier."""
        for pain_format in cls:
            if pain_format.code == code:
                return pain_format
        return None

    @property
    def is_direct_debit(self) -> bool:
        """Check if this format belongs to the direct debit family."""
        return self.code.startswith(DIRECT_DEBIT_FAMILY)

    @property
    def method(self) -> PaymentMethod:
        """Default payment method for the format family."""
        if self.code.startswith(CREDIT_TRANSFER_FAMILY):
            return PaymentMethod.TRANSFER
        return PaymentMethod.DIRECT_DEBIT

    @property
    def xml_version(self) -> int:
        """
        Version family selecting the element layout.

        Derived from the last two digits of the identifier; the direct debit
        family is shifted by one so that pain.008.xxx.02 lays out like
        pain.001.xxx.03.
        """
        increment = 1 if self.is_direct_debit else 0
        return int(self.code[-2:]) + increment


@dataclass(frozen=True)
class FormatInfo:
    """Resolved properties of a pain format."""

    pain_format: str
    root_tag: str
    version: int
    method: PaymentMethod

    @property
    def namespace(self) -> str:
        return f"{ISO20022_NAMESPACE}{self.pain_format}"

    @property
    def schema_location(self) -> str:
        return f"{self.namespace} {self.pain_format}.xsd"


def resolve_format(pain_format: str) -> FormatInfo:
    """
    Resolve a pain format identifier.

    Args:
        pain_format: Identifier such as "pain.008.001.02"

    Returns:
        FormatInfo with root tag, version family and payment method

    Raises:
        UnknownFormatException: if the identifier is not registered
    """
    registered = PainFormat.from_code(pain_format)
    if registered is None:
        raise UnknownFormatException(
            f"Unknown pain format: {pain_format!r}", pain_format=str(pain_format)
        )

    return FormatInfo(
        pain_format=registered.code,
        root_tag=registered.root_element,
        version=registered.xml_version,
        method=registered.method,
    )


def supported_formats() -> List[str]:
    """List every registered pain format identifier."""
    return [pain_format.code for pain_format in PainFormat]


class SEPASequenceType(Enum):
    """SEPA Direct Debit Sequence Types."""

    FRST = ("FRST", "First", "First collection of a series")
    RCUR = ("RCUR", "Recurring", "Recurring collection")
    FNAL = ("FNAL", "Final", "Final collection of a series")
    OOFF = ("OOFF", "One-Off", "Single collection")

    def __init__(self, code: str, name: str, description: str):
        self.code = code
        self.seq_name = name
        self.description = description

    @classmethod
    def from_code(cls, code: str) -> Optional["SEPASequenceType"]:
        """Get sequence type from code."""
        for st in cls:
            if st.code == code:
                return st
        return None


class SEPALocalInstrument(Enum):
    """SEPA Local Instrument Codes."""

    CORE = ("CORE", "Standard transfer")
    COR1 = ("COR1", "Expedited transfer")
    B2B = ("B2B", "Business transfer")

    def __init__(self, code: str, description: str):
        self.code = code
        self.description = description

    @classmethod
    def from_code(cls, code: str) -> Optional["SEPALocalInstrument"]:
        """Get local instrument from code."""
        for instrument in cls:
            if instrument.code == code:
                return instrument
        return None


class InstructionPriority(Enum):
    """SEPA order priority."""

    HIGH = ("HIGH", "High priority")
    NORM = ("NORM", "Normal priority")

    def __init__(self, code: str, description: str):
        self.code = code
        self.description = description
