def count_bits(x: int) -> int:
    """
    Number of set bits in a non-negative integer (popcount).
    """
    if x < 0:
        raise ValueError("x must be >= 0")
    return bin(x).count("1")


def highest_set_bit(x: int) -> int:
    """
    Index of the most significant set bit of x.

    Raises ValueError for x <= 0, which has no set bit.
    """
    if x <= 0:
        raise ValueError(f"x must be >= 1, got {x}")
    return x.bit_length() - 1


def factorial(n: int) -> int:
    if n < 0:
        raise ValueError("n must be >= 0")
    f = 1
    for k in range(2, n + 1):
        f *= k
    return f


def binomial(n: int, k: int) -> int:
    """
    Number of k-subsets of an n-set: n! / (k! * (n - k)!).

    Exact integer arithmetic; returns 0 when k is outside [0, n].
    """
    if n < 0:
        raise ValueError("n must be >= 0")
    if k < 0 or k > n:
        return 0
    return factorial(n) // (factorial(k) * factorial(n - k))
