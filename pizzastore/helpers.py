import math

from termcolor import cprint, colored

from .errors import ValidationFailure


def safe_int(value: str, minimum: int | None = None):
    """return int value or none if invalid / below minimum"""
    try:
        v = int(value)
        if minimum is not None and v < minimum:
            return None
        return v
    except ValueError:
        return None


def parse_price(value: str) -> float:
    """parse a price ceiling typed at the prompt"""
    try:
        p = float(value.strip())
    except ValueError:
        raise ValidationFailure(f"'{value.strip()}' is not a valid price") from None
    if math.isnan(p) or math.isinf(p):
        raise ValidationFailure(f"'{value.strip()}' is not a valid price")
    return p


def color_money(amount: float) -> str:
    """format amount as green money string"""
    return colored(f"${amount:.2f}", "green")


def parse_boolean_input(prompt: str, handle_invalid: bool = False) -> bool:
    """parse y/n style input; optionally warn on invalid"""
    p = prompt.lower().strip()
    if p in ("y", "yes"):
        return True
    if p in ("n", "no"):
        return False
    if handle_invalid:
        cprint("invalid input, please try again.", "red")
    return False


def require_text(value: str | None, label: str) -> str:
    """strip a free-text value and reject it when empty"""
    v = (value or "").strip()
    if not v:
        raise ValidationFailure(f"{label} cannot be empty")
    return v
