import numpy as np

from ._interface import IndexArray, Mask, Swap
from ._utils.conversions import indices_to_mask, mask_to_indices
from ._utils.intmath import count_bits, highest_set_bit


class IndexMap:
    """
    Two-way mapping between global indices (items of the universe) and local
    indices (rows/columns of the combination matrix).

    ``global_to_local[g]`` is -1 for items outside the selection. A swap keeps
    the local slot and changes which item lives there, so local order is only
    ascending for the initial selection.
    """

    def __init__(self, size: int, mask: Mask):
        selected = mask_to_indices(mask, size)
        self._size = size
        self._global_to_local = np.full(size, -1, dtype=np.intp)
        self._global_to_local[selected] = np.arange(selected.size, dtype=np.intp)
        self._local_to_global = selected

    def swap(self, removed: int, added: int) -> int:
        """Hand the slot of ``removed`` to ``added``; returns the slot."""
        slot = int(self._global_to_local[removed])
        if slot < 0:
            raise ValueError(f"item {removed} is not selected")
        if self._global_to_local[added] >= 0:
            raise ValueError(f"item {added} is already selected")

        self._global_to_local[removed] = -1
        self._global_to_local[added] = slot
        self._local_to_global[slot] = added
        return slot

    def swap_between(self, prev: Mask, new: Mask) -> Swap:
        """Apply the single replacement that turns selection prev into new."""
        gone = prev & ~new
        came = new & ~prev
        if count_bits(gone) != 1 or count_bits(came) != 1:
            raise ValueError(
                f"{prev:#x} -> {new:#x} is not a single replacement"
            )

        removed = highest_set_bit(gone)
        added = highest_set_bit(came)
        return Swap(removed, added, self.swap(removed, added))

    def is_consistent(self) -> bool:
        l2g = self._local_to_global
        if np.unique(l2g).size != l2g.size:
            return False
        if not np.array_equal(self._global_to_local[l2g], np.arange(l2g.size)):
            return False
        return int(np.count_nonzero(self._global_to_local >= 0)) == l2g.size

    def mask(self) -> Mask:
        return indices_to_mask(self._local_to_global)

    @property
    def size(self) -> int:
        return self._size

    @property
    def pick(self) -> int:
        return int(self._local_to_global.size)

    @property
    def global_to_local(self) -> IndexArray:
        view = self._global_to_local.view()
        view.flags.writeable = False
        return view

    @property
    def local_to_global(self) -> IndexArray:
        view = self._local_to_global.view()
        view.flags.writeable = False
        return view
