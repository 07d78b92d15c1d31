"""
SEPA pain Message Builder

Serializes a SEPADocument into the ISO 20022 XML layout of its pain format.
Version family 2 formats (pain.001.xxx.02, pain.008.xxx.01) keep batch
booking and grouping in the group header; version family 3 formats move
batch booking, count and control sum into each payment info block.
"""

import logging
import xml.etree.ElementTree as ET
from datetime import date, datetime, timezone
from typing import Optional, Union

from sepa_xml.core.exceptions import MissingRequiredTemporalException
from sepa_xml.protocols.pain.pain_codes import (
    BIC_NOT_PROVIDED,
    FormatInfo,
    PaymentMethod,
    SEPA_CHARGE_BEARER,
    SEPA_SCHEME_NAME,
    SEPA_SERVICE_LEVEL,
    XSI_NAMESPACE,
    resolve_format,
)
from sepa_xml.protocols.pain.pain_message import (
    GroupHeader,
    PaymentInfo,
    SEPADocument,
    SEPAParty,
    Transaction,
    to_cents,
)
from sepa_xml.protocols.pain.xml_nodes import NodePolicy, add_node

logger = logging.getLogger(__name__)

CONTAINER = NodePolicy.CONTAINER
OPTIONAL = NodePolicy.OPTIONAL


def _format_amount(value) -> str:
    return f"{to_cents(value):.2f}"


def _format_timestamp(value: datetime) -> str:
    """
    Render the creation timestamp.

    Timezone aware values are converted to UTC and marked with "Z"; naive
    values are written as given.
    """
    if value.tzinfo is not None:
        utc = value.astimezone(timezone.utc).replace(tzinfo=None)
        return utc.isoformat(timespec="seconds") + "Z"
    return value.isoformat(timespec="seconds")


def _format_date(
    value: Optional[Union[date, datetime]],
    field_name: str,
    entity_id: str,
) -> str:
    """Render a required date as YYYY-MM-DD."""
    if value is None:
        raise MissingRequiredTemporalException(
            f"{field_name} is required to serialize {entity_id or 'entity'}",
            field_name=field_name,
            entity_id=entity_id,
        )
    return value.isoformat()[:10]


class PainBuilder:
    """
    Builder for pain.001 / pain.008 XML documents.

    Example usage:
        builder = PainBuilder()
        root = builder.build(document)       # ElementTree element
        xml = builder.to_string(document)    # XML text
    """

    def build(self, document: SEPADocument) -> ET.Element:
        """
        Serialize a document to an ElementTree element.

        Normalizes the document first, so header and batch totals always
        reflect the current transactions.

        Args:
            document: The SEPA document

        Returns:
            The <Document> root element
        """
        document.normalize()
        fmt = resolve_format(document.pain_format)

        logger.debug(
            f"Serializing document {document.grp_hdr.id} as {fmt.pain_format} "
            f"(version {fmt.version}) with {len(document.payment_infos)} payment infos"
        )

        root = ET.Element(
            "Document",
            {
                "xmlns": fmt.namespace,
                "xmlns:xsi": XSI_NAMESPACE,
                "xsi:schemaLocation": fmt.schema_location,
            },
        )
        body = ET.SubElement(root, fmt.root_tag)

        body.append(self.build_group_header(document.grp_hdr, fmt))
        for payment_info in document.payment_infos:
            body.append(self.build_payment_info(payment_info, fmt))

        return root

    def to_string(self, document: SEPADocument) -> str:
        """Serialize a document to an XML string with a UTF-8 declaration."""
        data = ET.tostring(self.build(document), encoding="UTF-8", xml_declaration=True)
        return data.decode("utf-8")

    def build_group_header(self, grp_hdr: GroupHeader, fmt: FormatInfo) -> ET.Element:
        """Build the <GrpHdr> element."""
        element = ET.Element("GrpHdr")

        add_node(element, "MsgId", value=grp_hdr.id)
        add_node(element, "CreDtTm", value=_format_timestamp(grp_hdr.created))

        # XML v2 formats, add grouping + batch booking nodes
        if fmt.version == 2:
            add_node(element, "BtchBookg", value=grp_hdr.batch_booking)

        add_node(element, "NbOfTxs", value=grp_hdr.transaction_count)
        add_node(element, "CtrlSum", value=_format_amount(grp_hdr.control_sum))

        if fmt.version == 2:
            add_node(element, "Grpg", value=grp_hdr.grouping)

        add_node(element, "InitgPty", "Nm", value=grp_hdr.initiator_name)

        return element

    def build_payment_info(self, payment_info: PaymentInfo, fmt: FormatInfo) -> ET.Element:
        """Build the <PmtInf> element including its transactions."""
        element = ET.Element("PmtInf")
        is_debit = payment_info.method is PaymentMethod.DIRECT_DEBIT

        add_node(element, "PmtInfId", value=payment_info.id)
        add_node(element, "PmtMtd", value=payment_info.method.code)

        # XML v3 formats, batch booking and totals live on the batch
        if fmt.version == 3:
            add_node(element, "BtchBookg", value=payment_info.batch_booking)
            add_node(element, "NbOfTxs", value=payment_info.transaction_count)
            add_node(element, "CtrlSum", value=_format_amount(payment_info.control_sum))

        pmt_tp_inf = add_node(element, "PmtTpInf", policy=CONTAINER)
        add_node(pmt_tp_inf, "SvcLvl", "Cd", value=SEPA_SERVICE_LEVEL)
        if payment_info.local_instrument:
            add_node(pmt_tp_inf, "LclInstrm", "Cd", value=payment_info.local_instrument.code)

        if is_debit:
            add_node(pmt_tp_inf, "SeqTp", value=payment_info.sequence_type.code)
            add_node(
                element,
                "ReqdColltnDt",
                value=_format_date(
                    payment_info.collection_date, "collection_date", payment_info.id
                ),
            )
        else:
            add_node(
                element,
                "ReqdExctnDt",
                value=_format_date(
                    payment_info.requested_execution_date,
                    "requested_execution_date",
                    payment_info.id,
                ),
            )

        party_tag = "Cdtr" if is_debit else "Dbtr"
        party = payment_info.acting_party

        self._add_party(element, party_tag, party, payment_info.id)
        add_node(element, f"{party_tag}Acct", "Id", "IBAN", value=party.iban)

        agent_tag = "Agt" if fmt.version == 3 else "Agnt"
        self._add_agent(element, f"{party_tag}{agent_tag}", party)

        add_node(element, "ChrgBr", value=SEPA_CHARGE_BEARER)

        if is_debit:
            creditor_scheme = add_node(
                element, "CdtrSchmeId", "Id", "PrvtId", "Othr", policy=CONTAINER
            )
            add_node(creditor_scheme, "Id", value=payment_info.creditor_id)
            add_node(creditor_scheme, "SchmeNm", "Prtry", value=SEPA_SCHEME_NAME)

        for transaction in payment_info.transactions:
            element.append(self.build_transaction(transaction, fmt))

        return element

    def build_transaction(self, transaction: Transaction, fmt: FormatInfo) -> ET.Element:
        """Build a <DrctDbtTxInf> or <CdtTrfTxInf> element."""
        is_debit = transaction.method is PaymentMethod.DIRECT_DEBIT
        element = ET.Element(transaction.method.transaction_tag)

        payment_id = add_node(element, "PmtId", policy=CONTAINER)
        add_node(payment_id, "InstrId", value=transaction.id)
        add_node(payment_id, "EndToEndId", value=transaction.end_to_end_id)

        amount = _format_amount(transaction.amount)
        if is_debit:
            add_node(element, "InstdAmt", value=amount).set("Ccy", transaction.currency)

            mandate = add_node(element, "DrctDbtTx", "MndtRltdInf", policy=CONTAINER)
            add_node(mandate, "MndtId", value=transaction.mandate_id)
            add_node(
                mandate,
                "DtOfSgntr",
                value=_format_date(
                    transaction.mandate_signature_date,
                    "mandate_signature_date",
                    transaction.id,
                ),
            )

            if transaction.amendment:
                add_node(mandate, "AmdmntInd", value=True)
                add_node(mandate, "AmdmnInfDtls", value=transaction.amendment)
            else:
                add_node(mandate, "AmdmntInd", value=False)
        else:
            add_node(element, "Amt", "InstdAmt", value=amount).set(
                "Ccy", transaction.currency
            )

        party_tag = "Dbtr" if is_debit else "Cdtr"
        party = transaction.counterparty

        self._add_agent(element, f"{party_tag}Agt", party)
        self._add_party(element, party_tag, party, transaction.id)
        add_node(element, f"{party_tag}Acct", "Id", "IBAN", value=party.iban)

        add_node(element, "RmtInf", "Ustrd", value=transaction.remittance_info)

        if fmt.version != 3:
            add_node(element, "Purp", "Cd", value=transaction.purpose_code, policy=OPTIONAL)

        return element

    def _add_party(
        self,
        parent: ET.Element,
        tag: str,
        party: SEPAParty,
        entity_id: str,
    ) -> ET.Element:
        """Add name and, when complete, postal address of a party."""
        node = add_node(parent, tag, policy=CONTAINER)
        add_node(node, "Nm", value=party.name)

        if party.has_postal_address:
            postal = add_node(node, "PstlAdr", policy=CONTAINER)
            add_node(postal, "Ctry", value=party.country)
            add_node(postal, "AdrLine", value=party.street)
            add_node(postal, "AdrLine", value=party.city)
        elif party.has_partial_address:
            logger.warning(
                f"Incomplete postal address for {tag} of {entity_id}, address omitted"
            )

        return node

    def _add_agent(self, parent: ET.Element, tag: str, party: SEPAParty) -> ET.Element:
        """Add the financial institution of a party, NOTPROVIDED without BIC."""
        if party.bic:
            return add_node(parent, tag, "FinInstnId", "BIC", value=party.bic)
        return add_node(parent, tag, "FinInstnId", "Othr", "Id", value=BIC_NOT_PROVIDED)


def serialize(document: SEPADocument) -> ET.Element:
    """Serialize a SEPA document to its XML element tree."""
    return PainBuilder().build(document)
