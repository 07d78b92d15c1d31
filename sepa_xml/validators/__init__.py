"""
SEPA XML Validators

- checksum: mod-97 check digits for IBANs and creditor identifiers
- base_validator: validation result framework
- pain_validator: pre-serialization checks for SEPA documents
"""

from sepa_xml.validators.base_validator import (
    BaseValidator,
    ValidationIssue,
    ValidationResult,
    ValidationSeverity,
)
from sepa_xml.validators.checksum import (
    checksum_creditor_id,
    checksum_iban,
    mod97,
    to_digit_string,
    validate_creditor_id,
    validate_iban,
)
from sepa_xml.validators.pain_validator import PainDocumentValidator

__all__ = [
    "BaseValidator",
    "ValidationIssue",
    "ValidationResult",
    "ValidationSeverity",
    "checksum_creditor_id",
    "checksum_iban",
    "mod97",
    "to_digit_string",
    "validate_creditor_id",
    "validate_iban",
    "PainDocumentValidator",
]
