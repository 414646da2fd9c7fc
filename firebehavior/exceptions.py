"""Custom exceptions for the firebehavior package.

The fire behavior equations themselves never raise: degenerate numeric input
(zero fuel, zero wind, zero canopy) is handled by guards that return zero or
a large "never" sentinel. The exceptions below are raised only where caller
supplied configuration or reference data is parsed.

Exception Hierarchy:
    FireBehaviorError (base)
    ├── ConfigurationError - Invalid run configuration files or parameters
    ├── ValidationError - Input validation failures
    ├── FuelModelError - Unknown or malformed fuel catalog entries
    └── SpeciesTableError - Malformed tree species reference data

Example:
    >>> from firebehavior.exceptions import ConfigurationError
    >>> raise ConfigurationError("Missing required parameter 'fuel_model'")
"""

from typing import Optional


class FireBehaviorError(Exception):
    """Base exception for all firebehavior errors.

    All custom exceptions in the package inherit from this class, allowing
    users to catch every package error with a single except clause.

    Example:
        >>> try:
        ...     params = RunParams.from_json("run.json")
        ... except FireBehaviorError as e:
        ...     print(f"firebehavior error occurred: {e}")
    """

    pass


class ConfigurationError(FireBehaviorError):
    """Raised when a run configuration file or its parameters are invalid.

    This exception is raised when:
    - Required parameters are missing from the configuration
    - Parameter values have the wrong type
    - The configuration file cannot be parsed

    Attributes:
        message (str): Explanation of the configuration error.
        config_path (str): Path to the configuration file, if applicable.
        parameter (str): Name of the problematic parameter, if applicable.

    Example:
        >>> raise ConfigurationError(
        ...     "Scenario list is empty",
        ...     config_path="/path/to/run.json"
        ... )
    """

    def __init__(self, message: str, config_path: Optional[str] = None, parameter: Optional[str] = None):
        self.config_path = config_path
        self.parameter = parameter

        parts = []
        if config_path:
            parts.append(f"in {config_path}")
        if parameter:
            parts.append(f"parameter '{parameter}'")

        if parts:
            full_message = f"{message} ({', '.join(parts)})"
        else:
            full_message = message

        super().__init__(full_message)


class ValidationError(FireBehaviorError):
    """Raised when input validation fails.

    Attributes:
        message (str): Explanation of the validation failure.
        field (str): Name of the field that failed validation, if applicable.
        value: The invalid value, if applicable.

    Example:
        >>> raise ValidationError(
        ...     "Moisture list length does not match particle count",
        ...     field="moistures",
        ...     value=3
        ... )
    """

    def __init__(self, message: str, field: Optional[str] = None, value=None):
        self.field = field
        self.value = value

        parts = []
        if field:
            parts.append(f"field '{field}'")
        if value is not None:
            parts.append(f"value={value!r}")

        if parts:
            full_message = f"{message} ({', '.join(parts)})"
        else:
            full_message = message

        super().__init__(full_message)


class FuelModelError(FireBehaviorError):
    """Raised when a fuel catalog lookup fails.

    Attributes:
        message (str): Explanation of the fuel model error.
        fuel_model_id (int): The fuel model number involved, if applicable.

    Example:
        >>> raise FuelModelError(
        ...     "Unknown fuel model number",
        ...     fuel_model_id=999
        ... )
    """

    def __init__(self, message: str, fuel_model_id: Optional[int] = None):
        self.fuel_model_id = fuel_model_id

        if fuel_model_id is not None:
            full_message = f"{message} (fuel model ID: {fuel_model_id})"
        else:
            full_message = message

        super().__init__(full_message)


class SpeciesTableError(FireBehaviorError):
    """Raised when tree species reference data is malformed.

    Attributes:
        message (str): Explanation of the species table error.
        species_code (str): The species code involved, if applicable.

    Example:
        >>> raise SpeciesTableError(
        ...     "Duplicate species code",
        ...     species_code="PINPON"
        ... )
    """

    def __init__(self, message: str, species_code: Optional[str] = None):
        self.species_code = species_code

        if species_code is not None:
            full_message = f"{message} (species: {species_code})"
        else:
            full_message = message

        super().__init__(full_message)
