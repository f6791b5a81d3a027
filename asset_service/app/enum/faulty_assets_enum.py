from enum import Enum


class FaultyAssetStatus(str, Enum):

    pending = "Pending"
    in_repair = "In Repair"
    repaired = "Repaired"
    eol = "EOL (End of Life)"
    fixed_and_dispatched = "Fixed and Dispatched to Branch"
    dispatched_to_vendor = "Dispatched to Vendor"

    @classmethod
    def values(cls):
        return [s.value for s in cls]


# TODO: replace the open assignment with a transition table
# (Pending -> In Repair -> Repaired | EOL, any -> Dispatched to Vendor)
# once operations agree on the allowed moves.
