import operator
from typing import Sequence, TypeVar

MINIMUM_CHUNK_SIZE = 1

T = TypeVar("T")


def chunk(seq: Sequence[T], chunk_size: int) -> list[Sequence[T]]:
    """Split ``seq`` into consecutive chunks of ``chunk_size`` elements.

    Only the last chunk may be shorter than ``chunk_size``. An empty ``seq`` results
    in no chunks at all. Chunks are slices of ``seq``, which is left untouched.

    .. code-block:: pycon

        >>> chunk([1, 2, 3, 4, 5], 2)
        [[1, 2], [3, 4], [5]]

    :param seq: The sequence to split
    :param chunk_size: Number of elements per chunk

    :returns: Chunks in the order of ``seq``

    :raises: :exc:`ValueError` if ``chunk_size`` is not an integer greater than or
        equal to :const:`MINIMUM_CHUNK_SIZE`

    """
    if isinstance(chunk_size, bool):
        raise ValueError(f"{chunk_size=} is not an integer")

    try:
        chunk_size = operator.index(chunk_size)
    except TypeError as e:
        raise ValueError(f"{chunk_size=} is not an integer") from e

    if chunk_size < MINIMUM_CHUNK_SIZE:
        raise ValueError(f"{chunk_size=} is less than {MINIMUM_CHUNK_SIZE=}")

    return [seq[i : i + chunk_size] for i in range(0, len(seq), chunk_size)]
