import re
from typing import Optional

_NON_DIGIT = re.compile(r"[^0-9]")
# A '+' counts only when it comes before the first digit, e.g. "(+44) 20 ..."
_LEADING_PLUS = re.compile(r"^[^0-9]*\+")


def normalize_phone(number: Optional[str], default_country_code: str = "91") -> Optional[str]:
    """
    Best-effort E.164 formatting for Twilio.

    Keeps ASCII digits plus a single leading '+'. Numbers without a leading
    '+' get the default country code prepended. Length is not checked.
    """
    if not number:
        return None

    digits = _NON_DIGIT.sub("", number)
    if _LEADING_PLUS.match(number):
        return f"+{digits}"
    return f"+{default_country_code}{digits}"
