from .pool_ingestion_pipeline import PoolIngestionPipeline

__all__ = ["PoolIngestionPipeline"]
