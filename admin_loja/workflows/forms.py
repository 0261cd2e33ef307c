"""Form schemas for the back-office screens.

Field names follow the stored document keys (``nome``, ``preco`` ...). Each
schema carries the user-facing message shown next to an invalid field.
"""

from typing import Any, ClassVar, Dict, Mapping, Optional, Tuple, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from admin_loja.presentation.icons import CategoryIcon

F = TypeVar("F", bound="FormModel")


class FormModel(BaseModel):
    """Base for form schemas with per-field error messages."""

    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")

    MESSAGES: ClassVar[Dict[str, str]] = {}


class ProductForm(FormModel):
    nome: str = Field(min_length=3)
    preco: float = Field(ge=0.01)
    precoOriginal: Optional[float] = None
    categoria: str = Field(min_length=1)
    descricao: str = Field(min_length=10)
    emPromocao: bool = False

    MESSAGES: ClassVar[Dict[str, str]] = {
        "nome": "Nome deve ter no mínimo 3 caracteres",
        "preco": "Preço deve ser maior que zero",
        "precoOriginal": "Preço original inválido",
        "categoria": "Selecione uma categoria",
        "descricao": "Descrição deve ter no mínimo 10 caracteres",
    }

    @field_validator("precoOriginal", mode="before")
    @classmethod
    def _blank_original_price(cls, value: Any) -> Any:
        return None if value == "" else value

    def product_fields(self) -> Dict[str, Any]:
        """Attribute-keyed values for the product repository."""
        return {
            "name": self.nome,
            "price": self.preco,
            "original_price": self.precoOriginal,
            "category": self.categoria,
            "description": self.descricao,
            "on_promotion": self.emPromocao,
        }


class BannerForm(FormModel):
    ordem: int = Field(default=0, ge=0, le=999)
    ativo: bool = True

    MESSAGES: ClassVar[Dict[str, str]] = {
        "ordem": "Ordem deve ser um número entre 0 e 999",
    }

    def banner_fields(self) -> Dict[str, Any]:
        return {"order": self.ordem, "active": self.ativo}


class CategoryForm(FormModel):
    nome: str = Field(min_length=3)
    icone: CategoryIcon
    ordem: int = Field(default=0, ge=0)

    MESSAGES: ClassVar[Dict[str, str]] = {
        "nome": "Nome deve ter no mínimo 3 caracteres",
        "icone": "Selecione um ícone",
        "ordem": "Ordem deve ser um número positivo",
    }

    def category_fields(self) -> Dict[str, Any]:
        return {"name": self.nome, "icon": self.icone.value, "order": self.ordem}


class LoginForm(FormModel):
    email: str = Field(pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    password: str = Field(min_length=6)

    MESSAGES: ClassVar[Dict[str, str]] = {
        "email": "Email inválido",
        "password": "A senha deve ter no mínimo 6 caracteres",
    }


def validate_form(model: Type[F], data: Mapping[str, Any]) -> Tuple[Optional[F], Dict[str, str]]:
    """
    Validate raw form data against a schema.

    Args:
        model: Form schema class.
        data: Submitted values keyed by field name.

    Returns:
        ``(form, {})`` when valid, ``(None, errors)`` otherwise, with one
        message per invalid field.
    """
    try:
        return model.model_validate(dict(data)), {}
    except ValidationError as e:
        errors: Dict[str, str] = {}
        for error in e.errors():
            field_name = str(error["loc"][0]) if error["loc"] else "__root__"
            errors.setdefault(field_name, model.MESSAGES.get(field_name, error["msg"]))
        return None, errors
