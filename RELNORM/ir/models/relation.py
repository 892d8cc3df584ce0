"""Relation: a named schema with its governing FD set.

Tuple storage is owned elsewhere; a Relation only carries what the
normalization algorithms read. The algorithms live in ``RELNORM.fd`` and are
imported inside the methods, keeping the model layer free of them.
"""

from __future__ import annotations

from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from RELNORM.ir.models.attributes import AttributeSet, Schema
from RELNORM.ir.models.dependencies import FDSet


class Relation(BaseModel):
    name: str
    schema_: Schema
    dependencies: FDSet = FDSet()

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    def __init__(self, name: str, schema: Any, dependencies: Any = (), **data) -> None:
        super().__init__(name=name, schema_=schema, dependencies=dependencies, **data)

    @field_validator("schema_", mode="before")
    @classmethod
    def _coerce_schema(cls, value: Any) -> Schema:
        if isinstance(value, Schema):
            return value
        return Schema(value)

    @field_validator("dependencies", mode="before")
    @classmethod
    def _coerce_dependencies(cls, value: Any) -> FDSet:
        return FDSet.coerce(value)

    @model_validator(mode="after")
    def _check_dependencies(self) -> "Relation":
        from RELNORM.utils.validation.schema_validation import validate_dependencies

        validate_dependencies(self.dependencies, self.schema_, "relation_construction", self.name)
        return self

    @property
    def schema(self) -> Schema:
        return self.schema_

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Relation):
            return self.name == other.name
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.name)

    def __str__(self) -> str:
        return f"{self.name}({', '.join(str(a) for a in self.schema_)})"

    # -- algorithm delegates ------------------------------------------------

    def closure_of(self, attributes: Any) -> AttributeSet:
        from RELNORM.fd.closure import compute_attribute_closure

        return compute_attribute_closure(
            self.schema_.resolve(attributes), self.dependencies, schema=self.schema_
        )

    def candidate_keys(self) -> List[AttributeSet]:
        from RELNORM.fd.keys import find_all_minimal_keys

        return find_all_minimal_keys(self.schema_, self.dependencies)

    def is_super_key(self, key: Any) -> bool:
        from RELNORM.fd.keys import is_super_key

        return is_super_key(AttributeSet.coerce(key), self.schema_, self.dependencies)

    def is_minimal_key(self, key: Any) -> bool:
        from RELNORM.fd.keys import is_minimal_key

        return is_minimal_key(AttributeSet.coerce(key), self.schema_, self.dependencies)

    def is_in_bcnf(self) -> bool:
        from RELNORM.fd.normal_forms import is_in_bcnf

        return is_in_bcnf(self.schema_, self.dependencies)

    def is_in_3nf(self) -> bool:
        from RELNORM.fd.normal_forms import is_in_3nf

        return is_in_3nf(self.schema_, self.dependencies)

    def normal_form(self):
        from RELNORM.fd.normal_forms import determine_normal_form

        return determine_normal_form(self.schema_, self.dependencies)

    def decompose_bcnf(self) -> List["Relation"]:
        """Split into BCNF relations named ``<name>_<key attributes>``."""
        from RELNORM.fd.decomposition import decompose_to_bcnf

        return self._name_parts(decompose_to_bcnf(self.schema_, self.dependencies))

    def decompose_3nf(self) -> List["Relation"]:
        """Synthesize 3NF relations named ``<name>_<key attributes>``."""
        from RELNORM.fd.decomposition import decompose_to_3nf

        return self._name_parts(decompose_to_3nf(self.schema_, self.dependencies))

    def _name_parts(self, parts) -> List["Relation"]:
        from RELNORM.fd.keys import find_all_minimal_keys

        if len(parts) == 1:
            schema, dependencies = parts[0]
            return [Relation(self.name, schema, dependencies)]

        relations: List[Relation] = []
        used: Dict[str, int] = {}
        for schema, dependencies in parts:
            key = find_all_minimal_keys(schema, dependencies)[0]
            base = f"{self.name}_{'_'.join(key.names())}"
            used[base] = used.get(base, 0) + 1
            name = base if used[base] == 1 else f"{base}_{used[base]}"
            relations.append(Relation(name, schema, dependencies))
        return relations
