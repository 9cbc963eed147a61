"""Application interfaces (ports): repository protocols.

Define contracts for infrastructure implementations (DIP).
No runtime imports from cachedrepo.infrastructure.
"""

from cachedrepo.application.interfaces.repositories import IRepository

__all__ = ["IRepository"]
