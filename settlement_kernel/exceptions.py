"""
Typed Exception Hierarchy for the Settlement Kernel.

===============================================================================
WHY TYPED EXCEPTIONS
===============================================================================

A wage calculation must never continue on a guessed configuration. Callers
catch by type, never by message text, and every exception carries a CODE
class attribute plus the structured values that caused it.

Example:
    try:
        period = compute_period(ref, settings.closing_day, settings.pay_day)
    except ConfigurationError as e:
        api_response(code=e.code, detail=str(e))

===============================================================================
EXCEPTION HIERARCHY
===============================================================================

    SettlementError (base)
    |
    +-- ConfigurationError
    |   +-- InvalidClosingDayError
    |   +-- InvalidPayDayError
    |   +-- ClosingDayEqualsPayDayError
    |   +-- SettingsNotFoundError
    |   +-- ConfigLoadError
    |
    +-- InputError
        +-- InvalidReferenceDateError
        +-- UnsupportedSourceFormatError

===============================================================================
ERROR CODES - QUICK REFERENCE
===============================================================================

Category        | Code                        | When Raised
----------------|-----------------------------|-----------------------------------------
Configuration   | INVALID_CLOSING_DAY         | closing_day missing or outside 1-31
                | INVALID_PAY_DAY             | pay_day missing or outside 1-31
                | CLOSING_DAY_EQUALS_PAY_DAY  | Settings edit with closing == pay
                | SETTINGS_NOT_FOUND          | Company has no payroll settings row
                | CONFIG_LOAD_ERROR           | YAML config missing or malformed
----------------|-----------------------------|-----------------------------------------
Input           | INVALID_REFERENCE_DATE      | Reference date unparseable
                | UNSUPPORTED_SOURCE_FORMAT   | Work-session file type not readable
----------------|-----------------------------|-----------------------------------------

Partial data (a session with missing worker/project linkage or an
unreadable number) is NOT an exception: it is reported as a
``PartialDataWarning`` value next to the ingested sessions, and the session
is still aggregated.
"""


class SettlementError(Exception):
    """
    Base exception for all settlement kernel errors.

    All subclasses must have a `code` class attribute
    for machine-readable error identification.
    """

    code: str = "SETTLEMENT_ERROR"


# Configuration exceptions


class ConfigurationError(SettlementError):
    """Base exception for missing or invalid payroll configuration."""

    code: str = "CONFIGURATION_ERROR"


class InvalidClosingDayError(ConfigurationError):
    """closing_day is missing, not an integer, or outside 1-31."""

    code: str = "INVALID_CLOSING_DAY"

    def __init__(self, closing_day: object):
        self.closing_day = closing_day
        super().__init__(
            f"closing_day must be an integer between 1 and 31, got {closing_day!r}"
        )


class InvalidPayDayError(ConfigurationError):
    """pay_day is missing, not an integer, or outside 1-31."""

    code: str = "INVALID_PAY_DAY"

    def __init__(self, pay_day: object):
        self.pay_day = pay_day
        super().__init__(
            f"pay_day must be an integer between 1 and 31, got {pay_day!r}"
        )


class ClosingDayEqualsPayDayError(ConfigurationError):
    """
    Settings edit with identical closing and pay days.

    Enforced at the settings boundary only; the period calculator itself
    accepts equal values.
    """

    code: str = "CLOSING_DAY_EQUALS_PAY_DAY"

    def __init__(self, day: int):
        self.day = day
        super().__init__(
            f"closing_day and pay_day must differ (both are {day})"
        )


class SettingsNotFoundError(ConfigurationError):
    """No payroll settings exist for the company."""

    code: str = "SETTINGS_NOT_FOUND"

    def __init__(self, company_id: str):
        self.company_id = company_id
        super().__init__(f"No payroll settings for company: {company_id}")


class ConfigLoadError(ConfigurationError):
    """Settlement configuration file could not be loaded or parsed."""

    code: str = "CONFIG_LOAD_ERROR"

    def __init__(self, source: str, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f"Cannot load settlement config from {source}: {reason}")


# Input exceptions


class InputError(SettlementError):
    """Base exception for unusable caller input."""

    code: str = "INPUT_ERROR"


class InvalidReferenceDateError(InputError):
    """Reference date could not be interpreted as a calendar date."""

    code: str = "INVALID_REFERENCE_DATE"

    def __init__(self, value: object):
        self.value = value
        super().__init__(f"Invalid reference date: {value!r}")


class UnsupportedSourceFormatError(InputError):
    """Work-session source file has a format no adapter can read."""

    code: str = "UNSUPPORTED_SOURCE_FORMAT"

    def __init__(self, source_format: str):
        self.source_format = source_format
        super().__init__(f"Unsupported work-session source format: {source_format}")
