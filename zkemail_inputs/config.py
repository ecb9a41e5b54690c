"""Input generation options and environment-driven defaults.

``InputGenerationArgs`` is a closed set of options; contradictory
combinations are rejected when it is constructed, not deep in the pipeline.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator, model_validator
from pydantic_settings import BaseSettings

from .commitment import CommitmentScheme

SHA256_BLOCK_BYTES = 64


def _check_block_aligned(value: int | None) -> int | None:
    if value is not None and (value <= 0 or value % SHA256_BLOCK_BYTES):
        raise ValueError(f"must be a positive multiple of {SHA256_BLOCK_BYTES}")
    return value


class GeneratorSettings(BaseSettings):
    """Defaults applied when a call leaves an option unset."""

    model_config = {"env_prefix": "ZKEMAIL_"}

    max_headers_length: int = Field(
        default=1024,
        description="Header buffer capacity in bytes (SHA-padded)",
    )
    max_body_length: int = Field(
        default=1536,
        description="Body buffer capacity in bytes (SHA-padded)",
    )
    modulus_bit_length: int = Field(
        default=2048,
        description="RSA modulus size assumed when the verifier does not report one",
    )
    dns_timeout_seconds: int = Field(default=5, description="DKIM key lookup timeout")
    log_level: str = Field(default="INFO", description="Root log level name")
    log_json: bool = Field(default=True, description="Emit JSON log lines")

    @field_validator("max_headers_length", "max_body_length")
    @classmethod
    def _block_aligned(cls, value: int) -> int:
        return _check_block_aligned(value)


class InputGenerationArgs(BaseModel):
    """Features requested for one input generation call."""

    model_config = {"frozen": True, "extra": "forbid"}

    ignore_body_hash_check: bool = Field(
        default=False,
        description="Skip all body inputs (body, body hash index, partial hash)",
    )
    sha_precompute_selector: str | None = Field(
        default=None,
        description="Body substring marking where the carried part of the body starts",
    )
    max_headers_length: int | None = Field(
        default=None,
        description="Header buffer capacity; never below the GeneratorSettings default",
    )
    max_body_length: int | None = Field(
        default=None,
        description="Body buffer capacity; GeneratorSettings default when unset",
    )
    remove_soft_line_breaks: bool = Field(
        default=False,
        description="Emit decoded_body with quoted-printable soft breaks removed",
    )
    header_mask: tuple[int, ...] | None = Field(
        default=None,
        description="0/1 per header byte, one entry per buffer slot",
    )
    body_mask: tuple[int, ...] | None = Field(
        default=None,
        description="0/1 per body byte, one entry per buffer slot",
    )
    extract_from: bool = Field(default=False, description="Locate the From field and address")
    extract_to: bool = Field(default=False, description="Locate the To field and address")
    pubkey_commitment: CommitmentScheme | None = Field(
        default=None,
        description="Also emit pubkey_hash using this commitment scheme",
    )

    @field_validator("max_headers_length", "max_body_length")
    @classmethod
    def _block_aligned(cls, value: int | None) -> int | None:
        return _check_block_aligned(value)

    @field_validator("sha_precompute_selector")
    @classmethod
    def _non_empty_selector(cls, value: str | None) -> str | None:
        if value is not None and not value:
            raise ValueError("selector must not be empty")
        return value

    @field_validator("header_mask", "body_mask")
    @classmethod
    def _binary_mask(cls, value: tuple[int, ...] | None) -> tuple[int, ...] | None:
        if value is not None and any(bit not in (0, 1) for bit in value):
            raise ValueError("mask entries must be 0 or 1")
        return value

    @model_validator(mode="after")
    def _consistent(self) -> InputGenerationArgs:
        if self.ignore_body_hash_check:
            body_features = {
                "sha_precompute_selector": self.sha_precompute_selector is not None,
                "remove_soft_line_breaks": self.remove_soft_line_breaks,
                "body_mask": self.body_mask is not None,
            }
            requested = [name for name, enabled in body_features.items() if enabled]
            if requested:
                raise ValueError(
                    f"ignore_body_hash_check cannot be combined with {', '.join(requested)}"
                )

        # the header capacity is only known once resolved against the settings
        mask, capacity = self.body_mask, self.max_body_length
        if mask is not None and capacity is not None and len(mask) != capacity:
            raise ValueError(
                f"body_mask has {len(mask)} entries but max_body_length is {capacity}"
            )
        return self

    def resolve(self, settings: GeneratorSettings) -> InputGenerationArgs:
        """Return a copy with capacities resolved against *settings*.

        The header buffer is never smaller than the configured default; an
        unset body capacity falls back to the default.
        """
        return self.model_copy(update={
            "max_headers_length": max(
                self.max_headers_length or 0, settings.max_headers_length
            ),
            "max_body_length": self.max_body_length or settings.max_body_length,
        })
