"""Launch request and response contracts.

The deploy flow is non-custodial: the server prepares a pool-creation
transaction, the creator signs and submits it from their wallet, and then
reports back through confirm (or recover when submission state was lost).
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, HttpUrl, field_validator

from parity.charities import RANDOM_CHARITY
from parity.ledger.models import CurvePreset
from parity.solana.addresses import is_valid_address


def _validate_address(value: str) -> str:
    value = value.strip()
    if not is_valid_address(value):
        raise ValueError("Invalid Solana address")
    return value


def _validate_charity_wallet(value: str) -> str:
    value = value.strip()
    if value == RANDOM_CHARITY:
        return value
    return _validate_address(value)


def _normalize_symbol(value: str) -> str:
    return value.strip().upper()


class LaunchCreateRequest(BaseModel):
    """Request to create a pending launch."""

    name: str = Field(..., min_length=1, max_length=50, description="Token name")
    symbol: str = Field(..., min_length=1, max_length=10, description="Token symbol")
    description: Optional[str] = Field(None, max_length=500, description="Token description")
    image: Optional[HttpUrl] = Field(None, description="Token image URL")
    curve_preset: CurvePreset = Field(..., description="Curve preset id")
    charity_wallet: str = Field(
        ..., description="Charity wallet address, or 'random' for a verified charity"
    )
    charity_name: Optional[str] = Field(None, max_length=100, description="Charity name")

    @field_validator("symbol")
    @classmethod
    def validate_symbol(cls, v: str) -> str:
        return _normalize_symbol(v)

    @field_validator("charity_wallet")
    @classmethod
    def validate_charity_wallet(cls, v: str) -> str:
        return _validate_charity_wallet(v)


class LaunchUpdateRequest(BaseModel):
    """Partial update of a pending launch.

    Omitted fields are left alone. An explicit null clears description, image
    or charity_name; it is ignored for the required fields.
    """

    name: Optional[str] = Field(None, min_length=1, max_length=50)
    symbol: Optional[str] = Field(None, min_length=1, max_length=10)
    description: Optional[str] = Field(None, max_length=500)
    image: Optional[HttpUrl] = None
    curve_preset: Optional[CurvePreset] = None
    charity_wallet: Optional[str] = None
    charity_name: Optional[str] = Field(None, max_length=100)

    @field_validator("symbol")
    @classmethod
    def validate_symbol(cls, v: Optional[str]) -> Optional[str]:
        return _normalize_symbol(v) if v is not None else v

    @field_validator("charity_wallet")
    @classmethod
    def validate_charity_wallet(cls, v: Optional[str]) -> Optional[str]:
        return _validate_charity_wallet(v) if v is not None else v


class LaunchResponse(BaseModel):
    """A launch record."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    creator_id: str
    name: str
    symbol: str
    description: Optional[str] = None
    image: Optional[str] = None
    curve_preset: str
    charity_wallet: str
    charity_name: Optional[str] = None
    status: str
    pool_address: Optional[str] = None
    token_mint: Optional[str] = None
    deploy_signature: Optional[str] = None
    error_message: Optional[str] = None
    created_at: datetime
    deployed_at: Optional[datetime] = None


class LaunchCreatedResponse(BaseModel):
    id: str


class SuccessResponse(BaseModel):
    success: bool = True


class PrepareDeployRequest(BaseModel):
    """Request to prepare the pool-creation transaction."""

    creator_wallet: str = Field(..., description="Wallet that signs and pays for the deploy")

    @field_validator("creator_wallet")
    @classmethod
    def validate_creator_wallet(cls, v: str) -> str:
        return _validate_address(v)


class PrepareDeployResponse(BaseModel):
    """Prepared transaction, or the existing pool when already deployed."""

    launch_id: str
    already_deployed: bool = False
    transaction: Optional[str] = Field(
        None, description="Base64 transaction, partially signed by the mint keypair"
    )
    base_mint: Optional[str] = None
    pool_address: Optional[str] = None
    last_valid_block_height: Optional[int] = None


class ConfirmDeployRequest(BaseModel):
    """Report a submitted pool-creation transaction."""

    pool_address: str
    token_mint: str
    signature: str = Field(..., min_length=64, max_length=128)

    @field_validator("pool_address", "token_mint")
    @classmethod
    def validate_addresses(cls, v: str) -> str:
        return _validate_address(v)


class ConfirmDeployResponse(BaseModel):
    success: bool
    pool_address: str
    token_mint: str


class RecoverDeployRequest(BaseModel):
    """Check whether a prepared pool landed even though the client lost track."""

    pool_address: str
    token_mint: str

    @field_validator("pool_address", "token_mint")
    @classmethod
    def validate_addresses(cls, v: str) -> str:
        return _validate_address(v)


class RecoverDeployResponse(BaseModel):
    success: bool
    status: str
    pool_address: Optional[str] = None
    token_mint: Optional[str] = None


class SyncStatusResponse(BaseModel):
    id: str
    status: str
    changed: bool


class TickerItemResponse(BaseModel):
    """An active launch with its live pool price."""

    id: str
    name: str
    symbol: str
    image: Optional[str] = None
    pool_address: str
    token_mint: Optional[str] = None
    spot_price: Decimal = Field(..., description="Spot price in SOL per token")
    pool_liquidity_sol: Decimal
    curve_progress_pct: Decimal
