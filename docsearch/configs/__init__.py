"""Configuration for docsearch"""

from pathlib import Path

from dynaconf import Dynaconf, Validator

# Validators for docsearch settings.
_validators = [
    Validator("logging.format", is_in=["mozlog", "pretty"]),
    Validator("logging.level", is_in=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]),
    Validator("logging.can_propagate", is_type_of=bool),
    Validator("search.scheme", is_in=["http", "https"], must_exist=True),
    Validator("search.host", is_type_of=str, must_exist=True),
    Validator("search.port", is_type_of=int, gte=1, lte=65535, must_exist=True),
    Validator("search.username", "search.password", is_type_of=str),
    Validator("search.use_ssl", "search.use_basic_auth", "search.verify_certs", is_type_of=bool),
    Validator("search.request_timeout_sec", is_type_of=(int, float), gt=0),
    Validator("search.default_size", is_type_of=int, gte=0),
    # Production must verify certificates when TLS is on.
    Validator(
        "search.verify_certs",
        eq=True,
        when=Validator("search.use_ssl", eq=True),
        env=["production"],
    ),
]

# `root_path` = The directory holding the TOML files, DO NOT CHANGE.
# `envvar_prefix` = Export envvars with `export DOCSEARCH_FOO=bar`.
# `settings_files` = Load these files in the order.
# `environments` = Enable layered environments such as `development`, `production`, `testing` etc.
# `env_switcher` = Switch environments by `export DOCSEARCH_ENV=production`.
#                  Default: `development`.
# `validators` = Define validators for docsearch settings.

settings = Dynaconf(
    root_path=str(Path(__file__).parent),
    envvar_prefix="DOCSEARCH",
    settings_files=[
        "default.toml",
        "development.toml",
        "production.toml",
        "testing.toml",
    ],
    environments=True,
    env_switcher="DOCSEARCH_ENV",
    validators=_validators,
)
