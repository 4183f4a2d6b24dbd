import numpy as np

from ._interface import IndexArray, Matrix, Vector


def unit_vector(n: int, i: int) -> Vector:
    e = np.zeros(n, dtype=np.float64)
    e[i] = 1.0
    return e


def row_map(matrix: Matrix, r: int, column_map: IndexArray) -> Vector:
    """Row r of matrix, keeping only the columns listed in column_map, in that order."""
    return matrix[r, column_map].astype(np.float64)


def col_map(matrix: Matrix, c: int, row_map: IndexArray) -> Vector:
    """Column c of matrix, keeping only the rows listed in row_map, in that order."""
    return matrix[row_map, c].astype(np.float64)


def all_finite(matrix: Matrix) -> bool:
    return bool(np.all(np.isfinite(matrix)))


def sherman_morrison_update_inverse(inverse: Matrix, u: Vector, v: Vector) -> Matrix:
    """
    Calculates (A + u v)^-1 given inverse = A^-1, for a column vector u and a
    row vector v.

    See Sherman, Jack; Morrison, Winifred J. (1949). "Adjustment of an Inverse
    Matrix Corresponding to Changes in the Elements of a Given Column or a
    Given Row of the Original Matrix". Annals of Mathematical Statistics. 20: 621

    A zero denominator (A + u v singular) gives non-finite entries rather than
    an exception; check the result with all_finite.
    """
    inv_u = inverse @ u
    v_inv = v @ inverse
    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        return inverse - np.outer(inv_u, v_inv) / (1.0 + v @ inv_u)


def replace_row_and_column(
    combination: Matrix,
    inverse: Matrix,
    slot: int,
    new_row: Vector,
    new_col: Vector,
) -> Matrix:
    """
    Replace row and column ``slot`` of ``combination`` (in place) and return
    the matching inverse, as two rank-one updates of ``inverse``.

    ``new_row[slot]`` and ``new_col[slot]`` must agree: both are the diagonal
    entry of the incoming item.
    """
    n = combination.shape[0]
    e = unit_vector(n, slot)

    # Row: A + e_slot (new_row - A[slot])
    v_row = new_row - combination[slot, :]
    combination[slot, :] = new_row
    inverse = sherman_morrison_update_inverse(inverse, e, v_row)

    # Column: A + (new_col - A[:, slot]) e_slot^T, on the row-updated matrix
    u_col = new_col - combination[:, slot]
    combination[:, slot] = new_col
    return sherman_morrison_update_inverse(inverse, u_col, e)
