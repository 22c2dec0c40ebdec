from billparse.normalization.amounts import normalize_amount
from billparse.normalization.categories import Category, infer_category
from billparse.normalization.dates import normalize_date
from billparse.normalization.normalizer import ValueNormalizer

__all__ = ["Category", "ValueNormalizer", "infer_category", "normalize_amount", "normalize_date"]
