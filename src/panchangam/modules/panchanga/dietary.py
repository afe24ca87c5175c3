"""
Dietary-status derivation from the day's Thithi and observances.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, timedelta

from ...constants.tables import (
    EKADASI_LOOKAHEAD_DAYS,
    EKADASI_RESIDUE,
    OBSERVANCE_CYCLE,
    PRADOSHAM_RESIDUE,
)
from ...models.dietary import (
    DietaryCategory,
    DietaryStatus,
    ObservanceType,
    UpcomingObservance,
)
from ...models.elements import Thithi, ThithiName
from ...models.preferences import DietaryPreference

NO_DIETARY_CONCERNS = "No dietary concerns"


def derive_dietary_status(
    thithi: Thithi,
    extra_observances: Iterable[ObservanceType] = (),
    next_observance: UpcomingObservance | None = None,
) -> DietaryStatus:
    """Derive the day's food status.

    Rules, first match wins:
      1. Ekadasi (either paksha) -> strict fast
      2. An observance with a strict-fast restriction -> strict fast
      3. Observances restricting non-veg -> avoid non-veg, or
         multiple-observances when two or more apply
      4. Regular
    """
    if thithi.name is ThithiName.EKADASI:
        return DietaryStatus(
            category=DietaryCategory.STRICT_FAST,
            reason=DietaryCategory.STRICT_FAST.default_reason,
            next_observance=next_observance,
        )

    observances: list[ObservanceType] = []
    special = thithi.special_observance
    if special is not None:
        observances.append(special)
    for extra in extra_observances:
        if extra not in observances:
            observances.append(extra)

    fasting = [o for o in observances if o.restriction is DietaryCategory.STRICT_FAST]
    if fasting:
        return DietaryStatus(
            category=DietaryCategory.STRICT_FAST,
            reason=fasting[0].display_name,
            next_observance=next_observance,
        )

    avoiding = [o for o in observances if o.restriction is DietaryCategory.AVOID_NON_VEG]
    if len(avoiding) == 1:
        return DietaryStatus(
            category=DietaryCategory.AVOID_NON_VEG,
            reason=avoiding[0].display_name,
            next_observance=next_observance,
        )
    if avoiding:
        return DietaryStatus(
            category=DietaryCategory.MULTIPLE_OBSERVANCES,
            reason=", ".join(o.display_name for o in avoiding),
            next_observance=next_observance,
        )

    return DietaryStatus(category=DietaryCategory.REGULAR, next_observance=next_observance)


@dataclass(frozen=True)
class EffectiveDietaryStatus:
    """Dietary status as shown to a particular user."""

    category: DietaryCategory
    reason: str
    show_next_observance: bool
    stored: DietaryStatus


def effective_dietary_status(
    status: DietaryStatus, preference: DietaryPreference
) -> EffectiveDietaryStatus:
    """Apply the user's dietary preference without touching ``status``.

    Vegetarians have nothing to avoid on avoid-non-veg days; fasting
    applies regardless of diet.
    """
    vegetarian = preference is DietaryPreference.VEGETARIAN
    category, reason = status.category, status.reason
    if vegetarian and category is DietaryCategory.AVOID_NON_VEG:
        category, reason = DietaryCategory.REGULAR, NO_DIETARY_CONCERNS

    nxt = status.next_observance
    show_next = nxt is not None and (
        not vegetarian or nxt.type.restriction is DietaryCategory.STRICT_FAST
    )
    return EffectiveDietaryStatus(
        category=category, reason=reason, show_next_observance=show_next, stored=status
    )


def next_observance(day: date) -> UpcomingObservance | None:
    """Simplified lookahead over the day-of-month mod 15 cycle.

    Proposes Ekadasi when it is at most 3 days ahead, otherwise the next
    Pradosham. Returns None when the cycle puts Ekadasi on ``day`` itself.
    """
    residue = day.day % OBSERVANCE_CYCLE
    distance = (EKADASI_RESIDUE - residue + OBSERVANCE_CYCLE) % OBSERVANCE_CYCLE
    if distance == 0:
        return None
    if distance <= EKADASI_LOOKAHEAD_DAYS:
        observance = ObservanceType.EKADASI
    else:
        observance = ObservanceType.PRADOSHAM
        distance = (PRADOSHAM_RESIDUE - residue + OBSERVANCE_CYCLE) % OBSERVANCE_CYCLE
        if distance == 0:
            distance = OBSERVANCE_CYCLE
    return UpcomingObservance(
        name=observance.display_name,
        type=observance,
        date=day + timedelta(days=distance),
        description=observance.description,
    )
