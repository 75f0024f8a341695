"""
Dropout with the training flag passed on every call
"""

import torch
import torch.nn as nn
import torch.nn.functional as F


class Dropout(nn.Module):
    """
    Zeroes elements with probability p and rescales survivors by 1 / (1 - p)

    Unlike nn.Dropout, this ignores self.training. Callers pass `train`
    explicitly so the module carries no mode state.
    """

    def __init__(self, p: float) -> None:
        super().__init__()
        self.p = p

    def forward(self, x: torch.Tensor, train: bool) -> torch.Tensor:
        """
        Args:
            x: Tensor of any shape
            train: Apply dropout when True, identity otherwise

        Returns:
            Tensor with the same shape as the input
        """
        if not train:
            return x
        return F.dropout(x, self.p, training=True)
