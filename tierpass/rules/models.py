from pydantic import BaseModel, Field, field_validator


class ProjectRules(BaseModel):
    slug: str
    rules_version: str


class TierRule(BaseModel):
    level: int
    name: str
    duration_days: int = Field(gt=0)


class RewardsRules(BaseModel):
    reward_divisor: int = Field(default=100, gt=0)
    creator_share_percent: int = Field(default=90, ge=0, le=100)


class PlatformRules(BaseModel):
    administrator: str
    initial_unit_price: int = Field(ge=0)


class OpsRules(BaseModel):
    required_env: list[str] = Field(default_factory=list)


class Rules(BaseModel):
    project: ProjectRules
    tiers: list[TierRule]
    rewards: RewardsRules = Field(default_factory=RewardsRules)
    platform: PlatformRules
    ops: OpsRules = Field(default_factory=OpsRules)

    @field_validator("tiers")
    @classmethod
    def tiers_cover_levels(cls, tiers: list[TierRule]) -> list[TierRule]:
        levels = sorted(tier.level for tier in tiers)
        if levels != [1, 2, 3]:
            raise ValueError(f"tiers must define levels 1, 2 and 3 exactly once, got {levels}")
        return tiers
