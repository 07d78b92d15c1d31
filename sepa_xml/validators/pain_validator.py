"""
SEPA pain Document Validator

Checks a SEPADocument before serialization:
- Dates required by the payment method
- Identifier lengths
- IBAN and creditor identifier check digits
- Data the builder would silently drop or replace

Issues are keyed by the id of the message, batch or transaction they
belong to; party fields are named "<role>.<field>", e.g. "debtor.iban".
"""

import logging
from typing import Any

from sepa_xml.protocols.pain.pain_codes import (
    BIC_NOT_PROVIDED,
    PaymentMethod,
    SEPA_ID_MAX_LENGTH,
)
from sepa_xml.protocols.pain.pain_message import (
    PaymentInfo,
    SEPADocument,
    SEPAParty,
    Transaction,
)
from sepa_xml.validators.base_validator import (
    BaseValidator,
    ValidationResult,
    ValidationSeverity,
)
from sepa_xml.validators.checksum import validate_creditor_id, validate_iban

logger = logging.getLogger(__name__)


class PainDocumentValidator(BaseValidator):
    """
    Validator for SEPA payment initiation documents.

    Amounts, date ranges and country specific identifier rules are not
    checked.
    """

    @property
    def name(self) -> str:
        return "PainDocumentValidator"

    def validate(self, data: Any) -> ValidationResult:
        """
        Validate a SEPA document.

        Args:
            data: SEPADocument instance

        Returns:
            ValidationResult with any errors or warnings
        """
        result = self._create_result()

        if not isinstance(data, SEPADocument):
            result.add_error(
                "SEPA_INVALID_INPUT",
                f"Input must be a SEPADocument, got {type(data).__name__}",
                severity=ValidationSeverity.CRITICAL,
            )
            return result

        self._validate_id(data.grp_hdr.id, data.grp_hdr.id, "id", result)

        for payment_info in data.payment_infos:
            self._validate_payment_info(payment_info, result)

        for entity_id, issues in result.by_entity().items():
            logger.debug(
                f"Document {data.grp_hdr.id}, {entity_id}: "
                f"{', '.join(issue.code for issue in issues)}"
            )
        return result

    def _validate_payment_info(self, payment_info: PaymentInfo, result: ValidationResult) -> None:
        entity_id = payment_info.id
        self._validate_id(payment_info.id, entity_id, "id", result)

        if payment_info.method is PaymentMethod.DIRECT_DEBIT:
            if payment_info.collection_date is None:
                result.add_error(
                    "SEPA_MISSING_COLLECTION_DATE",
                    "Requested collection date is required for direct debits",
                    entity_id,
                    "collection_date",
                )

            if not payment_info.creditor_id:
                result.add_warning(
                    "SEPA_MISSING_CREDITOR_ID",
                    "Creditor scheme identifier is empty",
                    entity_id,
                    "creditor_id",
                )
            elif not validate_creditor_id(payment_info.creditor_id):
                result.add_error(
                    "SEPA_INVALID_CREDITOR_ID",
                    f"Invalid creditor identifier checksum: {payment_info.creditor_id}",
                    entity_id,
                    "creditor_id",
                )
            role = "creditor"
        else:
            if payment_info.requested_execution_date is None:
                result.add_error(
                    "SEPA_MISSING_EXECUTION_DATE",
                    "Requested execution date is required for transfers",
                    entity_id,
                    "requested_execution_date",
                )
            role = "debtor"

        self._validate_party(payment_info.acting_party, entity_id, role, result)

        for transaction in payment_info.transactions:
            self._validate_transaction(transaction, result)

    def _validate_transaction(self, transaction: Transaction, result: ValidationResult) -> None:
        entity_id = transaction.id
        self._validate_id(transaction.id, entity_id, "id", result)
        self._validate_id(transaction.end_to_end_id, entity_id, "end_to_end_id", result)

        if transaction.method is PaymentMethod.DIRECT_DEBIT:
            if transaction.mandate_signature_date is None:
                result.add_error(
                    "SEPA_MISSING_MANDATE_DATE",
                    "Mandate date of signature is required for direct debits",
                    entity_id,
                    "mandate_signature_date",
                )
            self._validate_id(transaction.mandate_id, entity_id, "mandate_id", result)
            role = "debtor"
        else:
            role = "creditor"

        self._validate_party(transaction.counterparty, entity_id, role, result)

    def _validate_party(
        self,
        party: SEPAParty,
        entity_id: str,
        role: str,
        result: ValidationResult,
    ) -> None:
        if party.iban and not validate_iban(party.iban):
            result.add_error(
                "SEPA_INVALID_IBAN",
                f"Invalid IBAN checksum: {party.iban}",
                entity_id,
                f"{role}.iban",
            )

        if not party.bic:
            result.add_warning(
                "SEPA_MISSING_BIC",
                f"No BIC given, {BIC_NOT_PROVIDED} will be used",
                entity_id,
                f"{role}.bic",
            )

        if party.has_partial_address:
            result.add_warning(
                "SEPA_PARTIAL_ADDRESS",
                "Street, city and country are all required, address will be omitted",
                entity_id,
                f"{role}.address",
            )

    def _validate_id(
        self,
        value: str,
        entity_id: str,
        field_name: str,
        result: ValidationResult,
    ) -> None:
        if value and len(value) > SEPA_ID_MAX_LENGTH:
            result.add_error(
                "SEPA_ID_TOO_LONG",
                f"Identifier must not exceed {SEPA_ID_MAX_LENGTH} characters",
                entity_id,
                field_name,
                length=len(value),
            )
