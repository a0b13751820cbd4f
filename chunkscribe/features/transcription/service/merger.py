from typing import Iterable
from ..domain.models import TranscriptFragment

FRAGMENT_SEPARATOR = "\n\n"

def merge_fragments(fragments: Iterable[TranscriptFragment]) -> str:
    """
    Joins fragment text in ascending sequence_index, whatever order they arrived in.
    sorted() is stable, so equal indices keep their arrival order.
    """
    ordered = sorted(fragments, key=lambda f: f.sequence_index)
    return FRAGMENT_SEPARATOR.join(f.text for f in ordered)
