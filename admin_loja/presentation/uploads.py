"""File drop zone hint and preview grid for image fields."""

from typing import Dict, Optional

from admin_loja.workflows.staging import StagingArea


def drop_zone(area: StagingArea, label: str = "Upload de arquivos", error: Optional[str] = None) -> Dict[str, object]:
    multiple = area.max_files > 1
    target = "os arquivos" if multiple else "o arquivo"
    return {
        "label": label,
        "hint": f"Arraste e solte {target} aqui ou clique para selecionar",
        "accept": ",".join(area.allowed_types),
        "multiple": multiple,
        "remaining": area.remaining,
        "error": error,
    }


def preview_grid(area: StagingArea) -> list:
    """Previews with the local ids used to remove them."""
    return [
        {"localId": staged.local_id, "src": staged.preview, "alt": f"Preview {index + 1}"}
        for index, staged in enumerate(area.files)
    ]
