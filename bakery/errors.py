class BakeryError(Exception):
    pass


class DocumentFetchError(BakeryError):
    def __init__(self, kind: str, url: str, cause: Exception) -> None:
        self.kind = kind
        self.url = url
        self.cause = cause
        super().__init__(f"Could not fetch {kind} from {url}: {cause}")


class DocumentValidationError(BakeryError):
    def __init__(self, kind: str, field: str, message: str) -> None:
        self.kind = kind
        self.field = field
        self.message = message
        super().__init__(f"Invalid {kind} document at {field}: {message}")


class RecipeAssemblyError(BakeryError):
    def __init__(self, recipe_id: str, message: str) -> None:
        self.recipe_id = recipe_id
        super().__init__(f"{recipe_id}: {message}")


class TemplateNotFound(RecipeAssemblyError):
    def __init__(self, recipe_id: str, template_id: str) -> None:
        self.template_id = template_id
        super().__init__(recipe_id, f"Template '{template_id}' not found")


class MissingRequiredParams(RecipeAssemblyError):
    def __init__(self, recipe_id: str, template_id: str, params: list[str]) -> None:
        self.template_id = template_id
        self.params = params
        super().__init__(
            recipe_id,
            f"Required parameters {', '.join(params)} missing for template "
            f"'{template_id}'",
        )


class InvalidIngredientAmount(RecipeAssemblyError):
    def __init__(self, recipe_id: str, ingredient_id: str, message: str) -> None:
        self.ingredient_id = ingredient_id
        super().__init__(recipe_id, f"Ingredient '{ingredient_id}': {message}")
