import os
from typing import Dict, TypeVar

from dotenv import dotenv_values

from .env import Env, PrimaryType

E = TypeVar("E", bound=Env)


def load_env(
    env_type: type[E] = Env,
    env_file: str | None = None,
    override: E | None = None,
) -> E:
    """
    Build an Env from the process environment, then the .env file, then
    any fields explicitly set on the override model. Later sources win.
    Unknown keys and empty values are skipped.
    """
    envars = env_type.types_map()

    if env_file is None:
        env_file = ".env"

    values: Dict[str, PrimaryType] = {}
    for envar_name, envar_type in envars.items():
        if envar_value := os.getenv(envar_name):
            values[envar_name] = envar_type(envar_value)

    if os.path.exists(env_file):
        for envar_name, envar_value in dotenv_values(dotenv_path=env_file).items():
            envar_type = envars.get(envar_name)
            if envar_type and envar_value:
                values[envar_name] = envar_type(envar_value)

    if override is not None:
        values.update(override.model_dump(exclude_unset=True))
        env_type = type(override)

    return env_type(**values)
