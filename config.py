"""
config.py — Konfiguracja aplikacji przez zmienne środowiskowe.
Wszystkie zmienne mają prefiks PROVE_CALC_.
"""
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Parser: maksymalne zagnieżdżenie nawiasów i prefiksów +/-
    max_nesting: int = 200

    # Evaluator: maksymalne zagnieżdżenie prawych operandów i negacji
    # (lewe łańcuchy 1+1+...+1 się nie liczą)
    max_tree_depth: int = 500

    # Wyjście drzewa (ast / POST /calc/ast): pydantic-core nie serializuje
    # modeli zagnieżdżonych głębiej niż ok. 255 poziomów
    max_ast_depth: int = 200

    # Logging
    log_level: str = "INFO"

    # App
    app_title: str = "ProveCalc"
    app_version: str = "0.1.0"

    model_config = SettingsConfigDict(env_prefix="PROVE_CALC_", env_file=".env", extra="ignore")
