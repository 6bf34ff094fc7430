"""
Helpers package.

Pure, stateless utilities shared by every layer. Only standard library
imports; never import from boundary.components, workflows, services or
interfaces.
"""
