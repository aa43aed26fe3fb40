
from pydantic_settings import BaseSettings


class Settings(BaseSettings):

    workspace_id: str = "default"

    docs_path: str = "./docs"
    kb_path: str = "./kb"

    chunk_max_chars: int = 4000
    chunk_overlap_chars: int = 400

    rag_top_k: int = 6
    excerpt_max_chars: int = 400
    max_suggested_routes: int = 5

    # Answer source context
    answer_max_sources: int = 6
    answer_max_source_chars: int = 1200

    # Confidence thresholds
    confidence_low_gap: float = 0.5
    confidence_low_top_score: float = 1.0
    confidence_high_gap: float = 3.0
    confidence_high_top_score: float = 6.0

    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        extra = "ignore"


settings = Settings()
