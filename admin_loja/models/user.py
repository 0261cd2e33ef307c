from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class User:
    id: str
    email: str
    name: Optional[str] = None
