from __future__ import annotations

import os
from typing import Optional, Sequence, Tuple

from openpyxl import Workbook
from openpyxl.utils import get_column_letter
from tqdm import tqdm

from astroprof.features.base import RadialProfile


def _sanitize_sheet_name(name: str) -> str:
    invalid = set('[]:*?/\\')
    cleaned = "".join("_" if c in invalid else c for c in name).strip()
    if not cleaned:
        cleaned = "sheet"
    return cleaned[:31]


def _unique_sheet_name(base: str, used: set[str]) -> str:
    if base not in used:
        used.add(base)
        return base
    i = 2
    while True:
        suffix = f"_{i}"
        candidate = f"{base[: 31 - len(suffix)]}{suffix}"
        if candidate not in used:
            used.add(candidate)
            return candidate
        i += 1


def export_profiles_to_excel(
    *,
    names: Sequence[str],
    profiles: Sequence[RadialProfile],
    output_path: str,
    peaks: Optional[Sequence[Tuple[int, int]]] = None,
    progress: bool = True,
) -> None:
    if len(names) != len(profiles):
        raise ValueError("names and profiles must have the same length")
    if peaks is not None and len(peaks) != len(profiles):
        raise ValueError("peaks and profiles must have the same length")

    wb = Workbook()
    summary = wb.active
    summary.title = "summary"
    used_names: set[str] = {"summary"}

    summary.append(["image", "sheet", "peak_x", "peak_y", "n_radii", "max_radius"])

    os.makedirs(os.path.dirname(os.path.abspath(output_path)) or ".", exist_ok=True)

    items = list(zip(names, profiles))
    item_iter = tqdm(items, desc="Profiles", unit="sheet", disable=not progress)

    for i, (name, profile) in enumerate(item_iter):
        sheet_name = _unique_sheet_name(_sanitize_sheet_name(str(name)), used_names)
        ws = wb.create_sheet(title=sheet_name)

        ws.cell(row=1, column=1, value="radius")
        ws.cell(row=1, column=2, value="integrated")

        n_rows = int(profile.radius.shape[0])
        for j in range(n_rows):
            ws.cell(row=j + 2, column=1, value=float(profile.radius[j]))
            ws.cell(row=j + 2, column=2, value=float(profile.integrated[j]))

        ws.freeze_panes = "A2"
        ws.auto_filter.ref = f"A1:{get_column_letter(2)}{n_rows + 1}"

        peak_x, peak_y = (None, None) if peaks is None else (int(peaks[i][0]), int(peaks[i][1]))
        summary.append([str(name), sheet_name, peak_x, peak_y, n_rows, float(profile.radius[-1])])

    summary.freeze_panes = "A2"
    wb.save(output_path)
