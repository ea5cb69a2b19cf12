"""Normalized match record persisted into the yearly partitions."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


def year_of(tourney_date: Optional[int]) -> int:
    """Calendar year of a YYYYMMDD date, ``0`` when the date is missing."""

    if not tourney_date:
        return 0
    return tourney_date // 10000


class NormalizedMatch(BaseModel):
    """One match with typed, independently nullable fields.

    Field aliases are the compact keys written to ``matches/{year}.json``;
    declaration order is the on-disk key order.
    """

    tourney_id: Optional[str] = Field(default=None, alias="tid")
    tourney_name: Optional[str] = Field(default=None, alias="tn")
    surface: Optional[str] = Field(default=None, alias="sf")
    draw_size: Optional[int] = Field(default=None, alias="ds")
    tourney_level: Optional[str] = Field(default=None, alias="tl")
    tourney_date: Optional[int] = Field(default=None, alias="td")
    match_num: Optional[int] = Field(default=None, alias="mn")

    winner_id: Optional[int] = Field(default=None, alias="wi")
    winner_seed: Optional[int] = Field(default=None, alias="ws")
    winner_entry: Optional[str] = Field(default=None, alias="we")
    winner_name: str = Field(..., alias="wn")
    winner_hand: Optional[str] = Field(default=None, alias="wh")
    winner_ht: Optional[int] = Field(default=None, alias="wht")
    winner_ioc: Optional[str] = Field(default=None, alias="wc")
    winner_age: Optional[float] = Field(default=None, alias="wa")

    loser_id: Optional[int] = Field(default=None, alias="li")
    loser_seed: Optional[int] = Field(default=None, alias="ls")
    loser_entry: Optional[str] = Field(default=None, alias="le")
    loser_name: str = Field(..., alias="ln")
    loser_hand: Optional[str] = Field(default=None, alias="lh")
    loser_ht: Optional[int] = Field(default=None, alias="lht")
    loser_ioc: Optional[str] = Field(default=None, alias="lc")
    loser_age: Optional[float] = Field(default=None, alias="la")

    score: Optional[str] = Field(default=None, alias="sc")
    best_of: Optional[int] = Field(default=None, alias="bo")
    round: Optional[str] = Field(default=None, alias="rd")
    minutes: Optional[int] = Field(default=None, alias="mi")

    # winner serve stats
    w_ace: Optional[int] = Field(default=None, alias="wAce")
    w_df: Optional[int] = Field(default=None, alias="wDf")
    w_svpt: Optional[int] = Field(default=None, alias="wSv")
    w_1st_in: Optional[int] = Field(default=None, alias="w1i")
    w_1st_won: Optional[int] = Field(default=None, alias="w1w")
    w_2nd_won: Optional[int] = Field(default=None, alias="w2w")
    w_sv_gms: Optional[int] = Field(default=None, alias="wSg")
    w_bp_saved: Optional[int] = Field(default=None, alias="wBs")
    w_bp_faced: Optional[int] = Field(default=None, alias="wBf")

    # loser serve stats
    l_ace: Optional[int] = Field(default=None, alias="lAce")
    l_df: Optional[int] = Field(default=None, alias="lDf")
    l_svpt: Optional[int] = Field(default=None, alias="lSv")
    l_1st_in: Optional[int] = Field(default=None, alias="l1i")
    l_1st_won: Optional[int] = Field(default=None, alias="l1w")
    l_2nd_won: Optional[int] = Field(default=None, alias="l2w")
    l_sv_gms: Optional[int] = Field(default=None, alias="lSg")
    l_bp_saved: Optional[int] = Field(default=None, alias="lBs")
    l_bp_faced: Optional[int] = Field(default=None, alias="lBf")

    winner_rank: Optional[int] = Field(default=None, alias="wr")
    winner_rank_points: Optional[int] = Field(default=None, alias="wrp")
    loser_rank: Optional[int] = Field(default=None, alias="lr")
    loser_rank_points: Optional[int] = Field(default=None, alias="lrp")

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @property
    def year(self) -> int:
        """Calendar year of the tournament date, ``0`` when undated."""

        return year_of(self.tourney_date)

    def to_artifact(self) -> dict:
        return self.model_dump(by_alias=True)
