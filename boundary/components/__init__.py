"""Components layer - the boundary engine building blocks.

Components are pure: they take DTOs and return DTOs, never touch global
state, never perform I/O.

- definition/ = raw declaration -> Boundary (Definition Normalizer)
- classifier/ = namespace trie, module classification, implicit boundaries
- checker/ = dependency, export, cycle and reference checks
- diagnostics/ = Violation construction and messages

Components do NOT import workflows, services or interfaces.
"""
