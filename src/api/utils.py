"""
Shared Utilities for FastAPI Routers
"""

import numpy as np
import pandas as pd
from typing import List, Dict, Any


def df_to_json(df: pd.DataFrame) -> List[Dict[str, Any]]:
    """
    Convert a pandas DataFrame to a JSON-safe list of dictionaries.

    numpy scalars become Python numbers; inf and nan become None.
    """
    df = df.replace([np.inf, -np.inf], np.nan)
    df = df.astype(object).where(pd.notnull(df), None)
    records = df.to_dict(orient="records")
    return [
        {key: (value.item() if isinstance(value, np.generic) else value) for key, value in row.items()}
        for row in records
    ]
