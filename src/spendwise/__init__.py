"""spendwise - Categorize expense exports and track spending against budgets."""

from spendwise.aggregator import aggregate
from spendwise.categories import categorize
from spendwise.columns import detect_columns
from spendwise.models import BudgetAlert, Category, ColumnMapping, PipelineResult, Transaction
from spendwise.normalizer import normalize
from spendwise.pipeline import BudgetSession, process_upload, run_pipeline

__version__ = "0.1.0"
__all__ = [
    "BudgetAlert",
    "BudgetSession",
    "Category",
    "ColumnMapping",
    "PipelineResult",
    "Transaction",
    "aggregate",
    "categorize",
    "detect_columns",
    "normalize",
    "process_upload",
    "run_pipeline",
]
