"""YAML file decoder."""

import structlog
import yaml

from hupconfig.decoders.base import FieldDecodeFailure, assign_field
from hupconfig.schema.base import ReloadableConfig


logger = structlog.get_logger()


class YamlFileDecoder:
    """Decodes a YAML mapping into fields declared with a ``file_key``.

    Keys without a matching field are ignored. Fields whose key is absent
    keep their current value.
    """

    def decode(self, data: bytes, target: ReloadableConfig) -> list[str]:
        """Decode YAML bytes into ``target``.

        Args:
            data: Raw YAML document.
            target: Model to assign fields on.

        Returns:
            Names of the fields that were assigned, in declaration order.

        Raises:
            FieldDecodeFailure: If the document is not valid YAML, is not a
                mapping, or a value fails validation.
        """
        try:
            parsed = yaml.safe_load(data.decode("utf-8"))
        except (yaml.YAMLError, UnicodeDecodeError) as e:
            raise FieldDecodeFailure(
                "yaml", [{"loc": "yaml", "msg": str(e), "type": "yaml_parse_error"}]
            ) from e

        if parsed is None:
            parsed = {}
        if not isinstance(parsed, dict):
            raise FieldDecodeFailure(
                "yaml",
                [
                    {
                        "loc": "yaml",
                        "msg": f"expected a mapping, got {type(parsed).__name__}",
                        "type": "yaml_not_mapping",
                    }
                ],
            )

        assigned = []
        for spec in type(target).field_specs():
            if spec.file_key is None or spec.file_key not in parsed:
                continue
            assign_field(target, spec.name, parsed[spec.file_key], spec.file_key)
            assigned.append(spec.name)

        known_keys = _file_keys(target)
        logger.debug(
            "yaml_fields_decoded",
            field_count=len(assigned),
            ignored_keys=sorted(str(key) for key in parsed if key not in known_keys),
        )
        return assigned


def _file_keys(target: ReloadableConfig) -> set[str]:
    return {spec.file_key for spec in type(target).field_specs() if spec.file_key}
