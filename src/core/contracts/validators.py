"""
JSON Schema Contract Validators

Модуль для валидации опубликованных записей и событий согласно формальным
JSON Schema контрактам. Presentation layer получает только эти формы:
opaque handles, verified флаг и состояние lifecycle, без plaintext.

Схемы (contracts/schema/):
- demand_record.json
- supply_record.json
- pricing_record.json
- domain_event.json
"""

import json
from pathlib import Path
from typing import Any, Dict

import jsonschema
from jsonschema import Draft202012Validator


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Загрузчик JSON Schema файлов.

    Автоматически находит схемы в contracts/schema/ относительно корня проекта.
    """

    def __init__(self):
        # Корень проекта (4 уровня вверх от этого файла)
        self._schema_dir = Path(__file__).parent.parent.parent.parent / "contracts" / "schema"
        if not self._schema_dir.exists():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")

        # Кэш загруженных схем
        self._schemas: Dict[str, Dict[str, Any]] = {}

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Загрузка JSON Schema файла.

        Args:
            schema_name: Имя схемы без расширения (например, 'pricing_record')

        Returns:
            Загруженная схема как dict

        Raises:
            FileNotFoundError: Если файл схемы не найден
            ValueError: Если схема не проходит meta-validation
        """
        if schema_name in self._schemas:
            return self._schemas[schema_name]

        schema_path = self._schema_dir / f"{schema_name}.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")

        with open(schema_path, "r", encoding="utf-8") as f:
            schema = json.load(f)

        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}")

        self._schemas[schema_name] = schema
        return schema


_SCHEMA_LOADER = SchemaLoader()


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """Базовый валидатор: данные против одной JSON Schema."""

    def __init__(self, schema_name: str):
        self.schema_name = schema_name
        self.schema = _SCHEMA_LOADER.load_schema(schema_name)
        self.validator = Draft202012Validator(self.schema)

    def validate(self, data: Dict[str, Any]) -> None:
        """
        Raises:
            ValidationError: Если данные не соответствуют схеме
        """
        self.validator.validate(data)

    def is_valid(self, data: Dict[str, Any]) -> bool:
        return self.validator.is_valid(data)

    def iter_errors(self, data: Dict[str, Any]):
        return self.validator.iter_errors(data)


class DemandRecordValidator(ContractValidator):
    def __init__(self):
        super().__init__("demand_record")


class SupplyRecordValidator(ContractValidator):
    def __init__(self):
        super().__init__("supply_record")


class PricingRecordValidator(ContractValidator):
    """Валидатор pricing_record: state VERIFIED/DISCLOSED требует verified=true."""

    def __init__(self):
        super().__init__("pricing_record")


class DomainEventValidator(ContractValidator):
    def __init__(self):
        super().__init__("domain_event")


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_demand_record(data: Dict[str, Any]) -> None:
    DemandRecordValidator().validate(data)


def validate_supply_record(data: Dict[str, Any]) -> None:
    SupplyRecordValidator().validate(data)


def validate_pricing_record(data: Dict[str, Any]) -> None:
    PricingRecordValidator().validate(data)


def validate_domain_event(data: Dict[str, Any]) -> None:
    DomainEventValidator().validate(data)
