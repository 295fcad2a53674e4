from __future__ import annotations

import unicodedata


def fold(text: str) -> str:
    """Lower-case ``text`` and strip accents so "Cédula" matches "cedula"."""

    decomposed = unicodedata.normalize("NFKD", str(text).strip().lower())
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def split_full_name(full_name: str) -> tuple[str, str]:
    """Split "Apellidos Nombres" on the last space into (last_names, first_names)."""

    full_name = full_name.strip()
    index = full_name.rfind(" ")
    if index > 0:
        return full_name[:index].strip(), full_name[index + 1 :]
    return full_name, ""
