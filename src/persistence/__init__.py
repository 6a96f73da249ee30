"""Persistence subsystem exports."""

from persistence.contracts import CaseRepository, SignatureStore
from persistence.fs_store import FsCaseRepository, FsSignatureStore

__all__ = ["CaseRepository", "FsCaseRepository", "FsSignatureStore", "SignatureStore"]
