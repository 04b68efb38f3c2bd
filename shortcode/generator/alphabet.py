import string

from ..models import AlphabetPreset

NUMERIC = string.digits
LOWERCASE_ALPHANUMERIC = string.digits + string.ascii_lowercase
ALPHANUMERIC = string.digits + string.ascii_lowercase + string.ascii_uppercase
UPPERCASE = string.ascii_uppercase
# alphanumerics but without characters that are easily confused
UNAMBIGUOUS = "".join(sorted(set(string.ascii_uppercase + string.digits) - set("OI01")))

_ALPHABET_BY_PRESET: dict[AlphabetPreset, str] = {
    AlphabetPreset.NUMERIC: NUMERIC,
    AlphabetPreset.LOWERCASE_ALPHANUMERIC: LOWERCASE_ALPHANUMERIC,
    AlphabetPreset.ALPHANUMERIC: ALPHANUMERIC,
    AlphabetPreset.UPPERCASE: UPPERCASE,
    AlphabetPreset.UNAMBIGUOUS: UNAMBIGUOUS,
}


def get_preset_alphabet(preset: AlphabetPreset) -> list[str]:
    return list(_ALPHABET_BY_PRESET[preset])
