"""Persisted proposal dataset (seed records for log queries)."""

from govind.storage.proposals import ProposalSeed, load_proposal_seeds

__all__ = ["ProposalSeed", "load_proposal_seeds"]
