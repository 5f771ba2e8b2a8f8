"""Pydantic schemas for JSON data validation."""

from pydantic import BaseModel, Field, field_validator, model_validator

from .constants import (
    BATCH_TIMEOUT_SECONDS,
    DEFAULT_LEAGUE_ID,
    DEFAULT_USER_AGENT,
    FETCH_WORKERS,
    FPL_API_BASE,
    MAX_STANDINGS_PAGES,
    REQUEST_TIMEOUT_SECONDS,
    STANDINGS_CACHE_TTL_SECONDS,
    STANDINGS_RETRY_SECONDS,
    TEAM_SIZE,
)


class TeamConfig(BaseModel):
    """A two-person team and how to find its league entries."""

    name: str = Field(..., min_length=1)
    prefix: str | None = Field(None, min_length=1, max_length=10)
    managers: list[str] | None = None
    entry_ids: list[int] | None = None

    @field_validator('managers', 'entry_ids')
    @classmethod
    def validate_pair(cls, v):
        """Ensure explicit member lists name exactly two distinct members."""
        if v is None:
            return v
        if len(v) != TEAM_SIZE:
            raise ValueError(f'Expected {TEAM_SIZE} members, got {len(v)}')
        if len(set(v)) != TEAM_SIZE:
            raise ValueError('Team members must be distinct')
        return v

    @model_validator(mode='after')
    def validate_descriptor(self):
        """Ensure the team can be resolved somehow."""
        if not (self.prefix or self.managers or self.entry_ids):
            raise ValueError(f'Team {self.name} needs a prefix, managers or entry_ids')
        return self

    class Config:
        extra = 'forbid'


class LeagueConfig(BaseModel):
    """League configuration settings."""

    league_id: int = Field(DEFAULT_LEAGUE_ID, ge=1)
    api_base: str = FPL_API_BASE
    user_agent: str = DEFAULT_USER_AGENT
    teams: list[TeamConfig]
    standings_cache_ttl_seconds: int = Field(STANDINGS_CACHE_TTL_SECONDS, ge=0)
    standings_retry_seconds: int = Field(STANDINGS_RETRY_SECONDS, ge=0)
    fetch_workers: int = Field(FETCH_WORKERS, ge=1, le=50)
    request_timeout_seconds: float = Field(REQUEST_TIMEOUT_SECONDS, gt=0)
    batch_timeout_seconds: float = Field(BATCH_TIMEOUT_SECONDS, gt=0)
    max_standings_pages: int = Field(MAX_STANDINGS_PAGES, ge=1)
    captains_path: str = 'captains.json'

    @field_validator('teams')
    @classmethod
    def validate_unique_names(cls, v):
        """Ensure team names are unique."""
        names = [team.name for team in v]
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            raise ValueError(f'Duplicate team names: {", ".join(duplicates)}')
        return v

    class Config:
        extra = 'forbid'


class CaptainsFile(BaseModel):
    """Complete captains.json file structure."""

    by_gw: dict[str, dict[str, int]] = Field(default_factory=dict, alias='byGw')

    class Config:
        extra = 'forbid'
        populate_by_name = True


class StandingsRow(BaseModel):
    """One row of the upstream classic league standings."""

    entry: int
    entry_name: str = ''
    player_name: str = ''

    class Config:
        extra = 'allow'


class StandingsBlock(BaseModel):
    has_next: bool = False
    results: list[StandingsRow] = Field(default_factory=list)

    class Config:
        extra = 'allow'


class StandingsPage(BaseModel):
    """A page of ``leagues-classic/{id}/standings``."""

    standings: StandingsBlock = Field(default_factory=StandingsBlock)

    class Config:
        extra = 'allow'
