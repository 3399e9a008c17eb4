from enum import Enum

from pydantic_settings import BaseSettings


class Env(Enum):
    local = "local"
    dev = "dev"
    prod = "prod"


class Config(BaseSettings):
    env: Env = Env.local
    data_url: str = "http://localhost:5173"
    recipes_path: str = "/data/recipes.json"
    step_templates_path: str = "/data/recipe-templates.json"
    ingredients_path: str = "/data/ingredients.json"
    fetch_timeout: float = 20
