"""SQLAlchemy column types for embeddings stored with the pgvector extension."""

from typing import List, Optional, Sequence

from sqlalchemy.types import UserDefinedType


class Vector(UserDefinedType):
    """PostgreSQL ``vector(n)`` type.

    Values travel as pgvector text literals (``"[x,y,z]"``) and come back as
    lists of floats.

    Args:
        dim: Dimensionality of the vector (1536 for OpenAI ada-style embeddings).
    """

    cache_ok = True

    def __init__(self, dim: int):
        if dim <= 0:
            raise ValueError(f"Vector dimension must be positive, got {dim}")
        self.dim = dim
        super().__init__()

    def get_col_spec(self, **kw) -> str:
        return f"vector({self.dim})"

    def bind_processor(self, dialect):
        """Return a converter from Python sequences to pgvector literals.

        Raises:
            ValueError: From the converter, when the value length differs
                from the column dimension.
        """
        dim = self.dim

        def process(value: Optional[Sequence[float]]) -> Optional[str]:
            if value is None:
                return None
            if len(value) != dim:
                raise ValueError(
                    f"Expected {dim} dimensions, got {len(value)}"
                )
            return f"[{','.join(str(float(v)) for v in value)}]"

        return process

    def result_processor(self, dialect, coltype):
        def process(value: Optional[str]) -> Optional[List[float]]:
            if value is None:
                return None
            body = value.strip("[]")
            if not body:
                return []
            return [float(v) for v in body.split(",")]

        return process

    def __repr__(self) -> str:
        return f"Vector({self.dim})"
