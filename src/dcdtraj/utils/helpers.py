"""
Utility functions for dcdtraj.
"""
import logging
from typing import Union, Sequence, Optional, List
from pathlib import Path

logger = logging.getLogger(__name__)

def update_dict_recursively(base_dict: dict, update_with: dict) -> dict:
    """
    Recursively update a dictionary with another dictionary.

    Args:
        base_dict: Base dictionary to update
        update_with: Dictionary containing updates

    Returns:
        Updated dictionary
    """
    for k, v_update in update_with.items():
        if isinstance(v_update, dict) and k in base_dict and isinstance(base_dict[k], dict):
            update_dict_recursively(base_dict[k], v_update)
        else:
            base_dict[k] = v_update
    return base_dict

def ensure_directory(path: Union[str, Path]) -> Path:
    """
    Ensure a directory exists, creating it if necessary.

    Args:
        path: Directory path

    Returns:
        Path object for the directory
    """
    dir_path = Path(path)
    dir_path.mkdir(parents=True, exist_ok=True)
    return dir_path

def parse_atom_indices(selection: Optional[Union[str, int, Sequence[int]]], n_atoms: int) -> Optional[List[int]]:
    """
    Parse an atom selection into a list of free-atom indices.

    Args:
        selection: None (all atoms), an int, a sequence of ints, or a string such as
            "0,3,5" or "2-6" (inclusive ranges)
        n_atoms: Number of free atoms available

    Returns:
        Sorted unique indices, or None for "all atoms"

    Raises:
        ValueError: If the selection is malformed or out of range
    """
    if selection is None:
        return None
    if isinstance(selection, int):
        indices = [selection]
    elif isinstance(selection, str):
        indices = []
        for part in selection.replace(' ', '').split(','):
            if not part:
                continue
            if '-' in part[1:]:
                lo, hi = part.split('-', 1)
                try:
                    indices.extend(range(int(lo), int(hi) + 1))
                except ValueError:
                    raise ValueError(f"Invalid atom range: {part}")
            else:
                try:
                    indices.append(int(part))
                except ValueError:
                    raise ValueError(f"Invalid atom index: {part}")
    else:
        indices = [int(i) for i in selection]

    bad = [i for i in indices if not 0 <= i < n_atoms]
    if bad:
        raise ValueError(f"Atom indices out of range [0, {n_atoms}): {bad}")
    return sorted(set(indices))
