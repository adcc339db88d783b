"""Application layer – notification providers and the dispatch use case."""
