from typing import Iterable, List, Union


def is_currency_code(code: str) -> bool:
    """Three ASCII letters, e.g. USD."""
    s = (code or "").strip()
    return len(s) == 3 and s.isascii() and s.isalpha()


def parse_currency_list(value: Union[str, Iterable[str], None]) -> List[str]:
    """
    Normalize a currency list.
    - Accepts a CSV string ("usd, eur") or any iterable of codes.
    - Upper-cases, drops blanks and duplicates, keeps first-seen order.
    No validation here; see is_currency_code.
    """
    if not value:
        return []
    if isinstance(value, str):
        parts = value.split(",")
    else:
        parts = [str(x) for x in value]
    out: List[str] = []
    for p in parts:
        code = p.strip().upper()
        if code and code not in out:
            out.append(code)
    return out
