"""
Configuration schemas using Pydantic for validation and type safety.
"""

from datetime import time
from typing import List, Literal, Optional

from pydantic import BaseModel, Field, field_validator


StrategyName = Literal["Calendar", "Butterfly", "Boxspread"]
FillType = Literal["1", "2", "3"]


class DataConfig(BaseModel):
    """Market data source configuration"""
    chain_path: Optional[str] = Field(default=None, description="Path to an options chain snapshot CSV")


class ScanConfig(BaseModel):
    """Scanner configuration"""
    strategies: List[StrategyName] = Field(
        default_factory=lambda: ["Calendar", "Butterfly", "Boxspread"],
        description="Scanners to run each cycle",
    )
    min_edge: float = Field(default=0.0, description="Emit a contender only if arb_value > min_edge")
    parallel: bool = Field(default=False, description="Evaluate scanners in a thread pool")

    @field_validator("strategies")
    @classmethod
    def validate_strategies(cls, v):
        """Reject an empty scanner list and drop duplicates (first occurrence wins)"""
        if not v:
            raise ValueError("At least one strategy must be enabled")
        return list(dict.fromkeys(v))

    @field_validator("min_edge")
    @classmethod
    def validate_min_edge(cls, v):
        if v < 0:
            raise ValueError(f"min_edge must be >= 0, got {v}")
        return v


class OrderConfig(BaseModel):
    """Order construction and sizing configuration"""
    account_id: str = Field(default="", description="Broker account id")
    discount_factor: float = Field(default=0.9, description="Fraction of the edge priced into the limit order")
    fill_type: FillType = Field(default="1", description="1=single, 2=scale fills, 3=scale contenders")
    capital_floor: float = Field(default=600.0, description="Minimum capital per traded spread")
    ranking_depth: Optional[int] = Field(default=None, description="Optional cap on contenders per cycle")

    underlying_symbol: str = Field(default="SPX", description="Underlying ticker")
    underlying_contract_id: str = Field(default="28812380", description="Underlying contract id used in conidex")

    # Fixed submission policy
    order_type: str = Field(default="LMT")
    venue: str = Field(default="SMART")
    side: Literal["BUY", "SELL"] = Field(default="BUY")
    time_in_force: str = Field(default="DAY")
    referrer_tag: str = Field(default="NO_REFERRER_PROVIDED")
    outside_regular_hours: bool = Field(default=False)
    use_adaptive_routing: bool = Field(default=False)

    @field_validator("fill_type", "account_id", "underlying_contract_id", mode="before")
    @classmethod
    def coerce_numeric_strings(cls, v):
        """Env/CLI overrides parse 3 or 28812380 as ints; these fields are strings"""
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator("discount_factor")
    @classmethod
    def validate_discount_factor(cls, v):
        """discount_factor must lie in (0, 1]"""
        if not (0.0 < v <= 1.0):
            raise ValueError(f"discount_factor must be in (0, 1], got {v}")
        return v

    @field_validator("capital_floor")
    @classmethod
    def validate_capital_floor(cls, v):
        if v <= 0:
            raise ValueError(f"capital_floor must be positive, got {v}")
        return v

    @field_validator("ranking_depth")
    @classmethod
    def validate_ranking_depth(cls, v):
        if v is not None and v < 1:
            raise ValueError(f"ranking_depth must be >= 1, got {v}")
        return v


class MarketConfig(BaseModel):
    """Trading session used to gate the polling loop"""
    timezone: str = Field(default="America/New_York", description="Exchange timezone")
    session_open: str = Field(default="09:30", description="Regular session open (HH:MM)")
    session_close: str = Field(default="16:00", description="Regular session close (HH:MM)")

    @field_validator("session_open", "session_close", mode="before")
    @classmethod
    def validate_hhmm(cls, v):
        """Accept datetime.time or 'HH:MM' strings, keep as string"""
        if isinstance(v, time):
            return v.strftime("%H:%M")
        if isinstance(v, str):
            try:
                hour, minute = map(int, v.split(":"))
                time(hour, minute)
            except ValueError as e:
                raise ValueError(f"Invalid session time: {v}. Expected HH:MM") from e
            return v
        raise ValueError(f"Invalid session time: {v}. Expected HH:MM")

    def open_time(self) -> time:
        hour, minute = map(int, self.session_open.split(":"))
        return time(hour, minute)

    def close_time(self) -> time:
        hour, minute = map(int, self.session_close.split(":"))
        return time(hour, minute)


class LoopConfig(BaseModel):
    """Polling loop configuration"""
    live: bool = Field(default=False, description="Submit to the broker (False = dry run)")
    paper_portfolio_value: float = Field(default=100000.0, description="Portfolio value used in dry run")
    seconds_to_sleep: float = Field(default=60.0, description="Pause between cycles")
    max_cycles: Optional[int] = Field(default=None, description="Stop after this many cycles")


class RunConfig(BaseModel):
    """Complete run configuration"""
    data: DataConfig = Field(default_factory=DataConfig)
    scan: ScanConfig = Field(default_factory=ScanConfig)
    orders: OrderConfig = Field(default_factory=OrderConfig)
    market: MarketConfig = Field(default_factory=MarketConfig)
    loop: LoopConfig = Field(default_factory=LoopConfig)
