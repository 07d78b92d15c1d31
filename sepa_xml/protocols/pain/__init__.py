"""
SEPA pain Protocol Implementation

Payment initiation messages exchanged between a customer and its bank:
- pain.001 - Customer Credit Transfer Initiation
- pain.008 - Customer Direct Debit Initiation

Supported format identifiers:
- pain.001.001.02, pain.001.003.02 (version 2)
- pain.001.001.03, pain.001.002.03, pain.001.003.03 (version 3)
- pain.008.001.01, pain.008.003.01 (version 2)
- pain.008.001.02, pain.008.003.02 (version 3)
"""

from typing import List

from sepa_xml.protocols.pain.pain_codes import (
    DEFAULT_PAIN_FORMAT,
    FormatInfo,
    InstructionPriority,
    PainFormat,
    PaymentMethod,
    SEPALocalInstrument,
    SEPASequenceType,
    resolve_format,
    supported_formats,
)
from sepa_xml.protocols.pain.pain_message import (
    GroupHeader,
    PaymentInfo,
    SEPADocument,
    SEPAParty,
    Transaction,
)
from sepa_xml.protocols.pain.pain_builder import (
    PainBuilder,
    serialize,
)
from sepa_xml.protocols.pain.xml_nodes import (
    NodePolicy,
    add_node,
)

__all__: List[str] = [
    # Codes
    "DEFAULT_PAIN_FORMAT",
    "FormatInfo",
    "InstructionPriority",
    "PainFormat",
    "PaymentMethod",
    "SEPALocalInstrument",
    "SEPASequenceType",
    "resolve_format",
    "supported_formats",
    # Message structures
    "GroupHeader",
    "PaymentInfo",
    "SEPADocument",
    "SEPAParty",
    "Transaction",
    # Builder
    "PainBuilder",
    "serialize",
    "NodePolicy",
    "add_node",
]
