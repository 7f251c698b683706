"""Selection rules engine.

Answers two questions about an empire selection:

- is a complete or partial selection legal under the hard rules, and
- for each option not yet chosen, would choosing it still leave at least
  one legal way to finish the selection.

Components, leaves first: RuleChecker (hard rules over a candidate set),
RequirementResolver (every way to satisfy nested requirement clauses),
CompletionSearch (combines resolutions with the base selection) and
AvailabilityDeriver (which options are currently prohibited).

This module is DETERMINISTIC and performs no I/O.
"""
