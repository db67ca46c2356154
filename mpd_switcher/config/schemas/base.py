from typing import Any, TypeVar, Type
import logging
from pydantic import BaseModel, ValidationError, ConfigDict

T = TypeVar("T", bound="BaseConfigModel")

logger = logging.getLogger(__name__)


class BaseConfigModel(BaseModel):
    """
    Base class for all settings sections.
    Provides a best-effort loading mechanism.
    """
    model_config = ConfigDict(validate_assignment=True, extra="ignore")

    @classmethod
    def load_best_effort(cls: Type[T], data: Any) -> T:
        """
        Build an instance from data by validating each field individually.
        Invalid fields are dropped and fall back to their default values.

        Nested sections are repaired recursively, so a bad value in one
        section (e.g. server.port) does not discard the other section
        (mpd.config_dir) from the same settings file.
        """
        if not isinstance(data, dict):
            return cls.model_validate({})

        valid_data = {}
        for field_name, field_info in cls.model_fields.items():
            if field_name not in data:
                continue

            val = data[field_name]

            # Nested sections repair themselves
            target_type = field_info.annotation
            if hasattr(target_type, "load_best_effort"):
                valid_data[field_name] = target_type.load_best_effort(val)
                continue

            # Validate the single field, trusting defaults for the rest
            try:
                cls.model_validate({field_name: val})
                valid_data[field_name] = val
            except ValidationError:
                logger.warning(
                    "[Config] Field '%s.%s' is invalid. Using default.",
                    cls.__name__,
                    field_name,
                )

        return cls.model_validate(valid_data)
