# MIT License (see LICENSE)
"""
Electrostatic charging by friction, induction and conduction.

Typical usage:
    from physics_lab.charge import FrictionTransfer

    model = FrictionTransfer(seed=1)
    model.start()
    while not model.at_equilibrium:
        model.step(1/60)
    model.charges   # {'rod': -20, 'wool': 20}
"""
from .transfer import (
    TransferPhase,
    TransferConfig,
    ChargeTransfer,
    FrictionTransfer,
    InductionTransfer,
    ConductionTransfer,
    TRANSFER_MODES,
    make_transfer,
    format_charge,
    charge_label,
)

__all__ = [
    # State machine
    "TransferPhase",
    "TransferConfig",
    "ChargeTransfer",
    # Variants
    "FrictionTransfer",
    "InductionTransfer",
    "ConductionTransfer",
    "TRANSFER_MODES",
    "make_transfer",
    # Formatting
    "format_charge",
    "charge_label",
]
