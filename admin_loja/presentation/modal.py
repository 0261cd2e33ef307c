"""Delete confirmation dialog."""

from dataclasses import dataclass

ENTITY_ARTICLES = {
    "produto": "este",
    "banner": "este",
    "categoria": "esta",
}


@dataclass(frozen=True)
class ConfirmModal:
    message: str
    confirm_label: str = "Deletar"
    cancel_label: str = "Cancelar"
    confirm_href: str = ""

    def to_dict(self) -> dict:
        return {
            "message": self.message,
            "confirmLabel": self.confirm_label,
            "cancelLabel": self.cancel_label,
            "confirmHref": self.confirm_href,
        }


def delete_confirmation(entity: str, confirm_href: str = "") -> ConfirmModal:
    article = ENTITY_ARTICLES.get(entity, "este")
    return ConfirmModal(
        message=f"Tem certeza que deseja deletar {article} {entity}?",
        confirm_href=confirm_href,
    )
