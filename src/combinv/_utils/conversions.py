import numpy as np

## ======================================================================================
## binary <-> gray
## ======================================================================================


def gray(x: int) -> int:
    """Reflected binary Gray code of x."""
    return x ^ (x >> 1)


## ======================================================================================
## mask <-> indices
## ======================================================================================


def mask_to_indices(mask: int, size: int) -> np.ndarray:
    """
    Indices of the set bits of mask, ascending.
    bit 0 is item 0.
    """
    if mask < 0 or mask >> size:
        raise ValueError(f"mask {mask:#x} does not fit in {size} bits")
    return np.array([i for i in range(size) if (mask >> i) & 1], dtype=np.intp)


def indices_to_mask(indices) -> int:
    mask = 0
    for i in indices:
        mask |= 1 << int(i)
    return mask


def mask_to_str(mask: int, size: int) -> str:
    """Most significant bit first, e.g. 0b0111 with size 4 -> '0111'."""
    return format(mask, f"0{size}b")
