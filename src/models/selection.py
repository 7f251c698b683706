"""The caller's current, possibly partial, set of chosen options.

A Selection is an immutable snapshot holding identifier references only.
Adding or removing an option produces a new snapshot, so engine calls
(including concurrent ones) always read a stable base selection.
"""

from collections.abc import Iterable

from pydantic import Field

from src.models.clauses import Conjunctive
from src.models.common import EmpireRulesBase, OptionCategory
from src.models.option import Option

# Category -> Selection field
_SINGLE_SLOTS: dict[OptionCategory, str] = {
    OptionCategory.ORIGIN: "origin",
    OptionCategory.AUTHORITY: "authority",
    OptionCategory.HABITAT: "habitat",
    OptionCategory.SPECIES_ARCHETYPE: "species_archetype",
}

_SET_SLOTS: dict[OptionCategory, str] = {
    OptionCategory.ETHIC: "ethics",
    OptionCategory.CIVIC: "civics",
    OptionCategory.TRAIT: "traits",
}


class Selection(EmpireRulesBase, frozen=True):
    """Chosen identifiers partitioned by category slot.

    Origin and authority are single-valued slots; ethics and civics are
    sets. Traits, habitat and species archetype are recorded for the caller
    but are not part of ``effective_options``: they never affect legality.
    """

    origin: str | None = None
    authority: str | None = None
    ethics: frozenset[str] = Field(default_factory=frozenset)
    civics: frozenset[str] = Field(default_factory=frozenset)

    # Bookkeeping slots
    traits: frozenset[str] = Field(default_factory=frozenset)
    habitat: str | None = None
    species_archetype: str | None = None

    # External input: which optional content packs are active
    active_packs: frozenset[str] = Field(default_factory=frozenset)

    @classmethod
    def from_options(
        cls,
        options: Iterable[Option],
        *,
        active_packs: Iterable[str] = (),
    ) -> "Selection":
        """Build a selection with each option placed in its category slot."""
        selection = cls(active_packs=frozenset(active_packs))
        for option in options:
            selection = selection.with_option(option)
        return selection

    @property
    def effective_options(self) -> Conjunctive:
        """Origin, authority, ethics and civics as one conjunctive set."""
        names: set[str] = set(self.ethics) | set(self.civics)
        if self.origin is not None:
            names.add(self.origin)
        if self.authority is not None:
            names.add(self.authority)
        return Conjunctive(frozenset(names))

    def with_option(self, option: Option) -> "Selection":
        """Return a new selection with ``option`` placed in its slot.

        Single-valued slots are overwritten; set-valued slots gain a member.
        """
        if option.category in _SINGLE_SLOTS:
            slot = _SINGLE_SLOTS[option.category]
            return self.model_copy(update={slot: option.name})
        slot = _SET_SLOTS[option.category]
        members: frozenset[str] = getattr(self, slot)
        return self.model_copy(update={slot: members | {option.name}})

    def without_option(self, name: str) -> "Selection":
        """Return a new selection with ``name`` cleared from every slot holding it."""
        update: dict[str, object] = {}
        for slot in _SINGLE_SLOTS.values():
            if getattr(self, slot) == name:
                update[slot] = None
        for slot in _SET_SLOTS.values():
            members: frozenset[str] = getattr(self, slot)
            if name in members:
                update[slot] = members - {name}
        if not update:
            return self
        return self.model_copy(update=update)

    def with_active_packs(self, active_packs: Iterable[str]) -> "Selection":
        """Return a new selection with the active content packs replaced."""
        return self.model_copy(update={"active_packs": frozenset(active_packs)})
