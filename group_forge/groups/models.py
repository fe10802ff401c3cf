"""Group data types produced by generators and persisted by the stores."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

from pydantic import BaseModel, Field, model_validator

FetchedValue = Union[int, float, str]
FetchedData = dict[str, FetchedValue]


class Tags(str, Enum):
    """Classification labels attached to a group."""

    NFT = "NFT"
    MAINNET = "Mainnet"
    ASSET = "Asset"
    USER = "User"
    VOTE = "Vote"
    POAP = "POAP"
    ENS = "ENS"
    LENS = "Lens"
    WEB3_SOCIAL = "Web3Social"
    SYBIL_RESISTANCE = "SybilResistance"
    ETH2 = "Eth2"
    GITCOIN_GRANT = "GitcoinGrant"
    GAME_JUTSU = "GameJutsu"
    TWITTER = "twitter"
    FACTORY = "Factory"
    BADGE_HOLDERS = "BadgeHolders"
    CORE_TEAM = "CoreTeam"


class AccountSource(str, Enum):
    """Where the identifiers of a group come from."""

    ETHEREUM = "ethereum"
    GITHUB = "github"
    TWITTER = "twitter"
    TEST = "test"
    DEV = "dev"


class ValueType(str, Enum):
    # Score: holders may claim any value up to theirs
    SCORE = "Score"
    # Info: holders must claim the exact value
    INFO = "Info"


class Properties(BaseModel):
    """Statistics derived from a group's data."""

    accounts_number: int
    tier_distribution: dict[str, int] = Field(default_factory=dict)


class GroupMetadata(BaseModel):
    name: str
    timestamp: int
    generated_by: str | None = None
    value_type: ValueType
    account_sources: list[AccountSource]
    tags: list[Tags] = Field(default_factory=list)
    properties: Properties | None = None

    @model_validator(mode="after")
    def _require_sources(self) -> "GroupMetadata":
        if not self.account_sources:
            raise ValueError("account_sources must contain at least one source")
        return self


class GroupWithData(GroupMetadata):
    data: FetchedData = Field(default_factory=dict)


class ResolvedGroupWithData(GroupWithData):
    resolved_identifier_data: FetchedData = Field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class GroupSearch:
    """Query used by generators to read groups already in the store."""

    group_name: str
    latest: bool = False
    timestamp: int | None = None


@dataclass(frozen=True, slots=True)
class GenerationContext:
    """Per-invocation context handed to a generator."""

    timestamp: int


@dataclass(frozen=True, slots=True)
class GenerationRecord:
    """One successful run of a generator."""

    name: str
    timestamp: int


__all__ = [
    "AccountSource",
    "FetchedData",
    "FetchedValue",
    "GenerationContext",
    "GenerationRecord",
    "GroupMetadata",
    "GroupSearch",
    "GroupWithData",
    "Properties",
    "ResolvedGroupWithData",
    "Tags",
    "ValueType",
]
