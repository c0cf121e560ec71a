from typing import List


def csv_to_list(v: str | List[str] | None) -> List[str]:
    if v is None:
        return []
    if isinstance(v, list):
        return [s.strip() for s in v if s and str(s).strip()]
    return [s.strip() for s in str(v).split(",") if s.strip()]


def normalize_ext(ext: str | None) -> str:
    """'.JPG' -> 'jpg'; None -> ''."""
    if not ext:
        return ""
    return ext.strip().lstrip(".").lower()


def ext_list(v: str | List[str] | None) -> List[str]:
    """csv_to_list + normalize_ext, dropping empties and duplicates (order kept)."""
    out: List[str] = []
    for item in csv_to_list(v):
        e = normalize_ext(item)
        if e and e not in out:
            out.append(e)
    return out
