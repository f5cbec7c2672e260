"""
Option chain normalization and a DataFrame-backed market data source.

Input chain is expected to include:
expiry, cp, strike, bid, ask, mid, ask_size, conid
(mid falls back to (bid+ask)/2 when missing; conid is optional)
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional

import numpy as np
import pandas as pd

from .models import Quote, StrikeSlices

logger = logging.getLogger(__name__)

CHAIN_COLUMNS = ["expiry", "cp", "strike", "bid", "ask", "mid", "ask_size", "conid"]

_CP_ALIASES = {"C": "C", "CALL": "C", "CE": "C", "P": "P", "PUT": "P", "PE": "P"}


def _conid_str(x) -> Optional[str]:
    """Contract id as text; numeric ids read as float (column with gaps) lose the .0"""
    if pd.isna(x):
        return None
    if isinstance(x, (float, np.floating)) and float(x).is_integer():
        return str(int(x))
    return str(x).strip()


def normalize_chain(chain: Optional[pd.DataFrame]) -> pd.DataFrame:
    """Normalize a raw chain to the stable schema; drops rows that cannot be quoted."""
    if chain is None or chain.empty:
        return pd.DataFrame(columns=CHAIN_COLUMNS)

    df = chain.copy()

    # Ensure required columns exist
    for col in CHAIN_COLUMNS:
        if col not in df.columns:
            df[col] = np.nan

    df["expiry"] = df["expiry"].astype(str).str.strip()
    df["cp"] = df["cp"].astype(str).str.strip().str.upper().map(_CP_ALIASES)
    df["strike"] = pd.to_numeric(df["strike"], errors="coerce").astype(float)
    df["bid"] = pd.to_numeric(df["bid"], errors="coerce")
    df["ask"] = pd.to_numeric(df["ask"], errors="coerce")
    df["mid"] = pd.to_numeric(df["mid"], errors="coerce")
    df["ask_size"] = pd.to_numeric(df["ask_size"], errors="coerce").fillna(0.0)

    # mid: explicit value, else bid/ask midpoint
    df["mid"] = np.where(
        np.isfinite(df["mid"]),
        df["mid"],
        np.where(np.isfinite(df["bid"]) & np.isfinite(df["ask"]), (df["bid"] + df["ask"]) / 2.0, np.nan),
    )
    df["bid"] = df["bid"].fillna(0.0)
    df["conid"] = df["conid"].apply(_conid_str)

    before = len(df)
    df = df[df["cp"].notna() & np.isfinite(df["strike"]) & np.isfinite(df["mid"])]
    df = df[(df["expiry"].str.len() > 0) & (df["expiry"].str.lower() != "nan")]
    dropped = before - len(df)
    if dropped:
        logger.info(f"normalize_chain: dropped {dropped} unusable rows")

    # last row wins for duplicate (expiry, cp, strike)
    df = df.drop_duplicates(subset=["expiry", "cp", "strike"], keep="last")
    return df[CHAIN_COLUMNS].reset_index(drop=True)


class FrameMarketData:
    """
    Market data and contract-id source over one normalized chain DataFrame.

    Dates keep first-appearance order; strikes are distinct and ascending per (date, cp).
    """

    def __init__(self, chain: pd.DataFrame):
        self.chain = normalize_chain(chain)

    @classmethod
    def from_csv(cls, path: str) -> "FrameMarketData":
        df = pd.read_csv(path, dtype={"expiry": str, "cp": str, "conid": str})
        logger.info(f"Loaded {len(df)} chain rows from {path}")
        return cls(df)

    def get_dates(self) -> List[str]:
        return [str(d) for d in pd.unique(self.chain["expiry"])]

    def get_strikes(self) -> StrikeSlices:
        out: StrikeSlices = {}
        for (expiry, cp), group in self.chain.groupby(["expiry", "cp"], sort=False):
            out.setdefault(expiry, {})[cp] = sorted(float(k) for k in group["strike"].unique())
        return out

    def get_quotes(self) -> Dict[str, Dict[str, Dict[float, Quote]]]:
        out: Dict[str, Dict[str, Dict[float, Quote]]] = {}
        for row in self.chain.itertuples(index=False):
            quote = Quote(mid_price=float(row.mid), bid=float(row.bid), ask_size=float(row.ask_size))
            out.setdefault(row.expiry, {}).setdefault(row.cp, {})[float(row.strike)] = quote
        return out

    def get_contract_ids(self, keys: Iterable[tuple]) -> Dict[str, Dict[str, Dict[float, str]]]:
        """Contract ids for the requested (date, cp, strike) keys; unknown keys are omitted."""
        wanted = {(d, cp, float(k)) for d, cp, k in keys}
        out: Dict[str, Dict[str, Dict[float, str]]] = {}
        for row in self.chain.itertuples(index=False):
            key = (row.expiry, row.cp, float(row.strike))
            if key not in wanted or row.conid is None:
                continue
            out.setdefault(row.expiry, {}).setdefault(row.cp, {})[float(row.strike)] = row.conid
        return out
