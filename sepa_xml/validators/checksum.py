"""
ISO 7064 mod-97 Checksums

Check digit validation and calculation for IBANs and SEPA creditor
identifiers. No country specific checks are done: callers must check the
structural shape (length, country code) before trusting a result.
"""


def to_digit_string(value: str) -> str:
    """
    Replace letters with numbers using the scheme A=10, B=11, ... Z=35.

    Lowercase letters map like uppercase ones, digits pass through and every
    other character is dropped.
    """
    digits = []
    for char in value:
        code = ord(char)
        if 65 <= code <= 90:
            digits.append(str(code - 55))
        elif 97 <= code <= 122:
            digits.append(str(code - 87))
        elif 48 <= code <= 57:
            digits.append(char)
    return "".join(digits)


def mod97(digits: str) -> int:
    """
    mod 97 of a decimal digit string of any length.

    Folds one digit at a time, so the full number is never built.
    """
    result = 0
    for digit in digits:
        result = (result * 10 + int(digit)) % 97
    return result


def _check_digits(rearranged: str) -> str:
    return f"{98 - mod97(to_digit_string(rearranged)):02d}"


def validate_iban(iban: str) -> bool:
    """
    Check if an IBAN is valid.

    Moves the first four characters to the end; the IBAN is valid when the
    resulting number mod 97 equals 1.
    """
    rearranged = iban[4:] + iban[:4]
    return mod97(to_digit_string(rearranged)) == 1


def checksum_iban(iban: str) -> str:
    """
    Calculate the check digits of an IBAN.

    The input carries any placeholder (usually "00") in positions 2-3; the
    same IBAN with the correct check digits is returned.

    Example: DE00123456781234567890 -> DE87123456781234567890
    """
    rearranged = iban[4:] + iban[:2] + "00"
    return iban[:2] + _check_digits(rearranged) + iban[4:]


def validate_creditor_id(creditor_id: str) -> bool:
    """
    Check if a SEPA creditor identifier is valid.

    The creditor business code (positions 4-6) is skipped. Note that the
    first four characters are appended here, while checksum_creditor_id
    appends the country code plus "00".
    """
    rearranged = creditor_id[7:] + creditor_id[:4]
    return mod97(to_digit_string(rearranged)) == 1


def checksum_creditor_id(creditor_id: str) -> str:
    """
    Calculate the check digits of a SEPA creditor identifier.

    Example: DE00ZZZ09999999999 -> DE98ZZZ09999999999
    """
    rearranged = creditor_id[7:] + creditor_id[:2] + "00"
    return creditor_id[:2] + _check_digits(rearranged) + creditor_id[4:]
