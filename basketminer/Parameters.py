import numbers

from basketminer.Exceptions import InvalidParameter

# default cap on itemset size and antecedent length
DEFAULT_MAXLEN = 10

# default size of the ranked rule view
DEFAULT_TOP_N = 20


def _is_number(value):
    # bool is an int subclass, but True is not a threshold
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


# min_support must be in (0, 1]
def check_support(value, name="min_support"):
    if not _is_number(value) or not 0 < value <= 1:
        raise InvalidParameter(name, value, "a number in (0, 1]")
    return float(value)


# min_confidence must be in [0, 1]
def check_confidence(value, name="min_confidence"):
    if not _is_number(value) or not 0 <= value <= 1:
        raise InvalidParameter(name, value, "a number in [0, 1]")
    return float(value)


def check_positive_int(value, name):
    if not isinstance(value, numbers.Integral) or isinstance(value, bool) or value < 1:
        raise InvalidParameter(name, value, "a positive integer")
    return int(value)
