"""
Asset number allocation and validation.

Asset numbers are the tag labels a technician handwrites onto each item, so
within one session they must be unique and must sit in the numeric band of
the item's test frequency:

- monthly family (every cadence except five-yearly): 1 - 9999
- five-yearly: 10000 and up

Everything here is derived from the session's current result set. There is
no stored counter, and nothing is locked: two concurrent submissions to the
same session can race to the same number.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional, Protocol, Set, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.test_results import TestResult
from ..schemas.enums import Frequency
from ..utils.errors import DuplicateAssetNumber, NotANumber, OutOfBand

logger = logging.getLogger(__name__)


class NumberedResult(Protocol):
    id: Optional[int]
    asset_number: Optional[str]
    frequency: str


class AssetBand(str, Enum):
    MONTHLY = "monthly"
    FIVE_YEARLY = "fiveyearly"

    @property
    def start(self) -> int:
        return 10000 if self is AssetBand.FIVE_YEARLY else 1

    @property
    def end(self) -> Optional[int]:
        """Inclusive upper bound, None when unbounded"""
        return None if self is AssetBand.FIVE_YEARLY else 9999

    def contains(self, number: int) -> bool:
        return number >= self.start and (self.end is None or number <= self.end)

    def describe(self) -> str:
        if self.end is None:
            return f"{self.start} or above"
        return f"{self.start}-{self.end}"


@dataclass(frozen=True)
class AssetProgress:
    next_monthly: int
    next_five_yearly: int
    monthly_count: int
    five_yearly_count: int


@dataclass(frozen=True)
class FrequencyChange:
    result_id: Optional[int]
    previous_frequency: str
    new_frequency: str
    previous_asset_number: Optional[str]
    requires_reentry: bool
    suggested_asset_number: Optional[int] = None


def band_for_frequency(frequency) -> AssetBand:
    value = frequency.value if isinstance(frequency, Frequency) else str(frequency)
    if value == Frequency.FIVE_YEARLY.value:
        return AssetBand.FIVE_YEARLY
    return AssetBand.MONTHLY


def parse_asset_number(value) -> Optional[int]:
    """Positive integer value of an asset number, or None if malformed"""
    if value is None:
        return None
    text = str(value).strip()
    # isdigit alone admits superscripts and other Unicode digits int() rejects
    if not (text.isascii() and text.isdigit()):
        return None
    number = int(text)
    return number if number > 0 else None


def used_numbers(results: Iterable[NumberedResult], exclude_result_id: Optional[int] = None) -> Set[int]:
    numbers = set()
    for result in results:
        if exclude_result_id is not None and result.id == exclude_result_id:
            continue
        number = parse_asset_number(result.asset_number)
        if number is not None:
            numbers.add(number)
    return numbers


def next_asset_number(results: Iterable[NumberedResult], band: AssetBand) -> int:
    """Smallest unused number at or above the band start.

    A linear probe is fine here: sessions hold tens to low hundreds of items.
    """
    taken = used_numbers(results)
    candidate = band.start
    while candidate in taken:
        candidate += 1

    if not band.contains(candidate):
        raise OutOfBand(f"No free asset numbers left in band {band.describe()}")
    return candidate


def validate_asset_number(
    results: Iterable[NumberedResult],
    candidate,
    frequency,
    exclude_result_id: Optional[int] = None,
) -> int:
    """Check a caller-supplied asset number and return its integer value.

    Raises NotANumber, OutOfBand or DuplicateAssetNumber.
    """
    number = parse_asset_number(candidate)
    if number is None:
        raise NotANumber(
            f"Asset number '{candidate}' must be a positive whole number",
            asset_number=None if candidate is None else str(candidate)
        )

    band = band_for_frequency(frequency)
    if not band.contains(number):
        raise OutOfBand(
            f"Asset number {number} is outside the {band.value} band ({band.describe()})",
            asset_number=str(candidate)
        )

    if number in used_numbers(results, exclude_result_id=exclude_result_id):
        raise DuplicateAssetNumber(
            f"Asset number {number} already exists for this session",
            asset_number=str(candidate)
        )

    return number


def renumber_on_frequency_change(
    result: NumberedResult,
    new_frequency,
    results: Sequence[NumberedResult],
) -> FrequencyChange:
    """Work out what a frequency edit means for the item's tag number.

    A band change never reassigns the number: the physical tag would no
    longer match the record. The caller must have the technician enter a new
    number; the suggestion is only a hint.
    """
    new_value = new_frequency.value if isinstance(new_frequency, Frequency) else str(new_frequency)
    old_band = band_for_frequency(result.frequency)
    new_band = band_for_frequency(new_value)

    if old_band is new_band:
        return FrequencyChange(
            result_id=result.id,
            previous_frequency=result.frequency,
            new_frequency=new_value,
            previous_asset_number=result.asset_number,
            requires_reentry=False,
        )

    others = [r for r in results if r.id != result.id]
    suggestion = next_asset_number(others, new_band)
    logger.info(
        f"Result {result.id} moved from {old_band.value} to {new_band.value} band; "
        f"asset number {result.asset_number} must be re-entered (suggest {suggestion})"
    )
    return FrequencyChange(
        result_id=result.id,
        previous_frequency=result.frequency,
        new_frequency=new_value,
        previous_asset_number=result.asset_number,
        requires_reentry=True,
        suggested_asset_number=suggestion,
    )


def asset_progress(results: Sequence[NumberedResult]) -> AssetProgress:
    monthly = [r for r in results if band_for_frequency(r.frequency) is AssetBand.MONTHLY]
    five_yearly = [r for r in results if band_for_frequency(r.frequency) is AssetBand.FIVE_YEARLY]
    return AssetProgress(
        next_monthly=next_asset_number(results, AssetBand.MONTHLY),
        next_five_yearly=next_asset_number(results, AssetBand.FIVE_YEARLY),
        monthly_count=len(monthly),
        five_yearly_count=len(five_yearly),
    )


class AssetNumberAllocator:
    """Database-backed entry points over the pure functions above"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def session_results(self, session_id: int) -> list:
        result = await self.db.execute(
            select(TestResult)
            .where(TestResult.session_id == session_id)
            .order_by(TestResult.id)
        )
        return list(result.scalars().all())

    async def next(self, session_id: int, band: AssetBand) -> int:
        return next_asset_number(await self.session_results(session_id), band)

    async def validate(
        self,
        session_id: int,
        candidate,
        frequency,
        exclude_result_id: Optional[int] = None,
    ) -> int:
        return validate_asset_number(
            await self.session_results(session_id),
            candidate,
            frequency,
            exclude_result_id=exclude_result_id,
        )

    async def progress(self, session_id: int) -> AssetProgress:
        return asset_progress(await self.session_results(session_id))
