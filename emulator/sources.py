from pathlib import Path


def decimal_to_binary(value):
    """Decimal number (as int or text) to its binary digits, e.g. 5 -> '101'."""
    number = int(str(value).strip())
    if number < 0:
        raise ValueError(f"Decimal encoding must not be negative: {number}")
    return format(number, "b")


def decimal_to_unary(value, digit="1"):
    """Decimal number to a unary tape input of n copies of digit."""
    number = int(str(value).strip())
    if number < 0:
        raise ValueError(f"Unary input must not be negative: {number}")
    return digit * number


def candidate_paths(filename, search_paths):
    return [Path(prefix) / filename if prefix else Path(filename) for prefix in search_paths]


def find_encoding_file(filename, search_paths=("",)):
    """Return the first existing file among the probed locations."""
    candidates = candidate_paths(filename, search_paths)
    for path in candidates:
        if path.is_file():
            return path
    tried = ", ".join(str(p.resolve()) for p in candidates)
    raise FileNotFoundError(f"Encoding file '{filename}' not found. Tried: {tried}")


def read_encoding_file(path):
    """The encoding is the first non-empty line of the file, with whitespace trimmed."""
    with open(path, "r", encoding="utf-8") as f:
        for line in f:
            if line.strip():
                return line.strip()
    return ""


def load_encoding(filename, search_paths=("",)):
    path = find_encoding_file(filename, search_paths)
    return path, read_encoding_file(path)


def encoding_to_decimal(encoding):
    """Decimal form of an encoding. A leading '1' is prepended so leading zeros survive the trip back."""
    return int("1" + encoding, 2)
