"""
Validation functions for record shapes.
"""

from collections import Counter
from dataclasses import fields, is_dataclass
from typing import List, Mapping

from roadtrip_parser.models import FieldType, RecordDef
from roadtrip_parser.sections import SectionName


def validate_record_def(record_def: RecordDef) -> List[str]:
    """Validate one record shape.

    Returns:
        List of validation errors (empty if valid)
    """
    errors = []
    section = str(record_def.section)

    if not record_def.fields:
        errors.append(f"Record '{section}': no fields defined")

    for label, values in (("field names", [f.name for f in record_def.fields]),
                          ("columns", record_def.columns)):
        counts = Counter(values)
        duplicates = [name for name, count in counts.items() if count > 1]
        if duplicates:
            errors.append(f"Record '{section}': duplicate {label}: {', '.join(sorted(duplicates))}")

    valid_types = {t.value for t in FieldType}
    for fld in record_def.fields:
        if str(getattr(fld.type, "value", fld.type)) not in valid_types:
            errors.append(f"Record '{section}', field '{fld.name}': unknown type '{fld.type}'")
        if not fld.column:
            errors.append(f"Record '{section}', field '{fld.name}': missing column name")

    if not is_dataclass(record_def.record_type):
        errors.append(f"Record '{section}': record type {record_def.record_type!r} is not a dataclass")
    else:
        declared = {f.name for f in fields(record_def.record_type)}
        for fld in record_def.fields:
            if fld.name not in declared:
                errors.append(
                    f"Record '{section}', field '{fld.name}': not declared on {record_def.record_type.__name__}"
                )

    return errors


def validate_record_defs(record_defs: Mapping[SectionName, RecordDef]) -> List[str]:
    """Validate a full section table.

    Every known section needs exactly one shape, keyed by its own name.

    Returns:
        List of validation errors (empty if valid)
    """
    errors = []

    for name in SectionName:
        if name not in record_defs:
            errors.append(f"Section '{name}': no record shape defined")

    attributes = Counter(rd.attribute for rd in record_defs.values())
    for attribute, count in attributes.items():
        if count > 1:
            errors.append(f"Attribute '{attribute}' used by {count} sections")

    for name, record_def in record_defs.items():
        if record_def.section != name:
            errors.append(f"Section '{name}': shape declares section '{record_def.section}'")
        errors.extend(validate_record_def(record_def))

    return errors
