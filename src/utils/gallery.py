from typing import Optional, Sequence, Tuple


class ImageGallery:
    """
    Carousel position over an ordered list of image URLs.

    The list is never mutated in place: the owner hands in a new sequence
    through replace() and the index is clamped to fit it.
    """

    def __init__(self, images: Sequence[str] = ()) -> None:
        self._images: Tuple[str, ...] = tuple(images)
        self._index = 0

    @property
    def images(self) -> Tuple[str, ...]:
        return self._images

    @property
    def index(self) -> int:
        return self._index

    def __len__(self) -> int:
        return len(self._images)

    @property
    def current(self) -> Optional[str]:
        if not self._images:
            return None
        return self._images[self._index]

    @property
    def can_navigate(self) -> bool:
        return len(self._images) > 1

    def previous(self) -> int:
        if self._images:
            self._index = self._index - 1 if self._index > 0 else len(self._images) - 1
        return self._index

    def next(self) -> int:
        if self._images:
            self._index = self._index + 1 if self._index < len(self._images) - 1 else 0
        return self._index

    def replace(self, images: Sequence[str]) -> None:
        self._images = tuple(images)
        self._index = max(0, min(self._index, len(self._images) - 1))
