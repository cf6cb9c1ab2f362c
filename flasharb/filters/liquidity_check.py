# flasharb/filters/liquidity_check.py

from dataclasses import dataclass

from flasharb.config import LIQUIDITY_MULTIPLIER


@dataclass
class LiquidityResult:
    ok: bool
    depth: int
    loan_size: int
    required: int
    reason: str = ""


def liquidity_guard(
    depth: int,
    loan_size: int,
    multiplier: int = LIQUIDITY_MULTIPLIER,
) -> LiquidityResult:
    """
    depth: reserve0 + reserve1 of the primary AMM pair (base units)
    loan_size: flash loan amount (base units)

    Coarse pre-filter, not a slippage bound.
    """
    required = loan_size * multiplier

    if depth <= 0:
        return LiquidityResult(
            ok=False,
            depth=depth,
            loan_size=loan_size,
            required=required,
            reason="No pool or unreadable reserves",
        )

    if depth < required:
        return LiquidityResult(
            ok=False,
            depth=depth,
            loan_size=loan_size,
            required=required,
            reason=f"Depth {depth} < {multiplier}x loan ({required})",
        )

    return LiquidityResult(
        ok=True,
        depth=depth,
        loan_size=loan_size,
        required=required,
    )
