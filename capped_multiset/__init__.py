from capped_multiset.capped_multiset import CappedMultiset, InvalidInputError

__all__ = ["CappedMultiset", "InvalidInputError"]
