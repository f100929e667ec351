from functools import wraps

from dateutil.tz import gettz

default_settings = {
    "TIMEZONE": None,
    "DAYFIRST": False,
    "PERIOD_SEPARATORS": ["--", "/"],
}


class SettingValidationError(ValueError):
    pass


class Settings:
    """Control and configure default behavior of timeperiods.

    Currently, supported settings are:

    * `TIMEZONE`
    * `DAYFIRST`
    * `PERIOD_SEPARATORS`
    """

    def __init__(self, settings=None):
        if settings:
            self._updateall(settings.items())
        else:
            self._updateall(default_settings.items())

    def _updateall(self, iterable):
        for key, value in iterable:
            setattr(self, key, value)

    def replace(self, mod_settings=None, **kwds):
        for k, v in kwds.items():
            if v is None:
                raise TypeError('Invalid {{"{}": {}}}'.format(k, v))

        for x in default_settings:
            kwds.setdefault(x, getattr(self, x))

        kwds.update(mod_settings or {})
        check_settings(kwds)

        return Settings(settings=kwds)


settings = Settings()


def apply_settings(f):
    @wraps(f)
    def wrapper(*args, **kwargs):
        mod_settings = kwargs.get("settings")

        kwargs["settings"] = mod_settings or settings

        if isinstance(kwargs["settings"], dict):
            kwargs["settings"] = settings.replace(mod_settings=mod_settings)

        if not isinstance(kwargs["settings"], Settings):
            raise TypeError(
                "settings can only be either dict or instance of Settings class"
            )

        return f(*args, **kwargs)

    return wrapper


def _check_timezone(setting_name, setting_value):
    if setting_value is None:
        return
    if setting_value.lower() == "local":
        return
    if gettz(setting_value) is None:
        raise SettingValidationError(
            '"{}" is not a valid value for "{}", it should be "local" or a '
            "timezone name".format(setting_value, setting_name)
        )


def _check_separators(setting_name, setting_value):
    if not setting_value or not all(
        isinstance(separator, str) and separator for separator in setting_value
    ):
        raise SettingValidationError(
            '"{}" must be a non-empty list of non-empty strings'.format(setting_name)
        )


def check_settings(settings):
    """
    Check if provided settings are valid, if not it raises `SettingValidationError`.
    Only checks for the modified settings.
    """
    settings_values = {
        "TIMEZONE": {
            "type": (str, type(None)),
            "extra_check": _check_timezone,
        },
        "DAYFIRST": {
            "type": bool,
        },
        "PERIOD_SEPARATORS": {
            "type": list,
            "extra_check": _check_separators,
        },
    }

    modified_settings = settings  # check only modified settings

    # check settings keys:
    for setting in modified_settings:
        if setting not in settings_values:
            raise SettingValidationError('"{}" is not a valid setting'.format(setting))

    for setting_name, setting_value in modified_settings.items():
        setting_type = type(setting_value)
        setting_props = settings_values[setting_name]

        # check type:
        if not isinstance(setting_value, setting_props["type"]):
            raise SettingValidationError(
                '"{}" must be "{}", not "{}".'.format(
                    setting_name, setting_props["type"], setting_type.__name__
                )
            )

        # check values:
        extra_check = setting_props.get("extra_check")
        if extra_check:
            extra_check(setting_name, setting_value)
