"""Application use-cases for recalculating pool star ratings."""
