from marshmallow import EXCLUDE, INCLUDE, Schema, ValidationError, fields, validate, validates_schema
from typing import Any, Dict, List


class ComponentRecordSchema(Schema):
    """Schema for a single component record sent for scoring"""
    class Meta:
        unknown = INCLUDE

    category = fields.Str(required=True, validate=validate.Length(max=50))
    name = fields.Str(allow_none=True, validate=validate.Length(max=300))
    tags = fields.List(fields.Str(), allow_none=True)
    specs = fields.Dict(keys=fields.Str(), allow_none=True)
    detailedSpecs = fields.Dict(keys=fields.Str(), allow_none=True)
    specifications = fields.Dict(keys=fields.Str(), allow_none=True)


class BenchmarkRequestSchema(Schema):
    """Schema for validating benchmark score requests"""
    class Meta:
        unknown = EXCLUDE

    products = fields.List(fields.Dict(), allow_none=True)
    components = fields.Dict(keys=fields.Str(), values=fields.Dict(allow_none=True), allow_none=True)

    @validates_schema
    def validate_source(self, data, **kwargs):
        if data.get('products') is None and data.get('components') is None:
            raise ValidationError("No products or components provided")


def _record_id(record: Dict[str, Any]):
    identifier = record.get('id', record.get('_id'))
    return str(identifier) if identifier is not None else None


def validate_benchmark_request(data: Any, max_products: int = 30) -> List[Dict[str, Any]]:
    """Validate a score request and return the ordered component records.

    Only the first ``max_products`` records are considered, and records
    sharing an ``id``/``_id`` are kept once.
    """
    if not isinstance(data, dict):
        raise ValueError("Invalid benchmark request: expected a JSON object")

    try:
        request_data = BenchmarkRequestSchema().load(data)
    except ValidationError as err:
        raise ValueError(f"Invalid benchmark request: {err.messages}")

    if request_data.get('products') is not None:
        raw_records = request_data['products']
    else:
        raw_records = [record for record in request_data['components'].values() if record]

    record_schema = ComponentRecordSchema()
    raw_records = raw_records[:max_products]
    records = []
    seen_ids = set()
    for index, raw in enumerate(raw_records):
        try:
            record = dict(record_schema.load(raw))
        except ValidationError as err:
            raise ValueError(f"Invalid component at position {index}: {err.messages}")

        record_id = _record_id(record)
        if record_id is not None:
            if record_id in seen_ids:
                continue
            seen_ids.add(record_id)
        records.append(record)

    return records
