"""
Input embeddings for RoBERTa

Sums token, position and token type lookups, then applies LayerNorm and dropout.
Positions are counted from padding_idx + 1 and padding tokens share position padding_idx.
"""

from dataclasses import dataclass

import torch
import torch.nn as nn

from .config import RobertaConfig, load_config
from .dropout import Dropout
from .load_weights import load_embedding_weights

PADDING_IDX = 1
LAYER_NORM_EPS = 1e-12


class EmbeddingInputError(ValueError):
    """Raised when both or neither of input_ids / inputs_embeds are given"""

    def __init__(self) -> None:
        super().__init__("exactly one of token identifiers or token vectors must be supplied.")


@dataclass(frozen=True)
class EmbeddingInput:
    """
    Source of the base embedding: token ids or precomputed token vectors, never both

    Attributes:
        input_ids: (batch, seq) token ids
        inputs_embeds: (batch, seq, hidden_size) precomputed token vectors
    """

    input_ids: torch.Tensor | None = None
    inputs_embeds: torch.Tensor | None = None

    def __post_init__(self) -> None:
        if (self.input_ids is None) == (self.inputs_embeds is None):
            raise EmbeddingInputError()

    @property
    def input_shape(self) -> torch.Size:
        """(batch, seq) regardless of which source was given"""
        if self.input_ids is not None:
            return self.input_ids.shape
        return self.inputs_embeds.shape[:2]


class RobertaEmbeddings(nn.Module):
    """
    Token + position + token type embeddings, followed by LayerNorm and dropout

    Submodule names match HuggingFace checkpoints (word_embeddings,
    position_embeddings, token_type_embeddings, LayerNorm) so pretrained
    weights load without renaming.
    """

    def __init__(self, config: RobertaConfig) -> None:
        super().__init__()
        self.padding_idx: int = PADDING_IDX

        self.word_embeddings = nn.Embedding(
            config.vocab_size, config.hidden_size, padding_idx=self.padding_idx
        )
        self.position_embeddings = nn.Embedding(
            config.max_position_embeddings, config.hidden_size, padding_idx=self.padding_idx
        )
        self.token_type_embeddings = nn.Embedding(config.type_vocab_size, config.hidden_size)

        # eps stays at 1e-12 even when config.json says otherwise
        self.LayerNorm = nn.LayerNorm(config.hidden_size, eps=LAYER_NORM_EPS)
        self.dropout = Dropout(config.hidden_dropout_prob)

    @classmethod
    def from_pretrained(cls, repo_id: str, device: str | torch.device = "cpu") -> "RobertaEmbeddings":
        """
        Build the embedding layer and fill it with pretrained weights from HuggingFace

        Args:
            repo_id: HuggingFace model repository ID (e.g. "FacebookAI/roberta-base")
            device: Device to place the weights on
        """
        config = load_config(repo_id)

        # Skip random init, every parameter is overwritten by the checkpoint
        with torch.device("meta"):
            embeddings = cls(config)

        weights = load_embedding_weights(repo_id, device=device)
        missing_keys, unexpected_keys = embeddings.load_state_dict(
            weights, strict=False, assign=True
        )
        if missing_keys:
            print(f"Warning: Missing keys: {missing_keys}")
        if unexpected_keys:
            print(f"Warning: Unexpected keys: {unexpected_keys}")

        return embeddings.to(device)

    def create_position_ids_from_input_ids(self, input_ids: torch.Tensor) -> torch.Tensor:
        """
        Number non-padding tokens from padding_idx + 1; padding gets padding_idx

        Example (padding_idx=1): [[1, 5, 7, 1, 9]] -> [[1, 2, 3, 1, 4]]

        Args:
            input_ids: (batch, seq)

        Returns:
            position_ids: (batch, seq)
        """
        mask = input_ids.ne(self.padding_idx).long()  # (batch, seq)
        return torch.cumsum(mask, dim=1) * mask + self.padding_idx  # (batch, seq)

    def create_position_ids_from_inputs_embeds(self, inputs_embeds: torch.Tensor) -> torch.Tensor:
        """
        Sequential positions padding_idx + 1 .. padding_idx + seq for every row

        Padding can't be detected from vectors, so no position is skipped.

        Args:
            inputs_embeds: (batch, seq, hidden_size)

        Returns:
            position_ids: (batch, seq)
        """
        batch_size, seq_len = inputs_embeds.shape[:2]
        position_ids = torch.arange(
            self.padding_idx + 1,
            seq_len + self.padding_idx + 1,
            dtype=torch.long,
            device=inputs_embeds.device,
        )  # (seq,)
        return position_ids.unsqueeze(0).expand(batch_size, seq_len)  # (batch, seq)

    def forward(
        self,
        input_ids: torch.Tensor | None = None,  # (batch, seq)
        token_type_ids: torch.Tensor | None = None,  # (batch, seq)
        position_ids: torch.Tensor | None = None,  # (batch, seq)
        inputs_embeds: torch.Tensor | None = None,  # (batch, seq, hidden_size)
        train: bool = False,
    ) -> torch.Tensor:
        """Compute input embeddings

        Exactly one of input_ids / inputs_embeds must be given. Missing
        position ids are derived from input_ids when available, otherwise
        numbered sequentially. Missing token type ids default to zeros.

        Returns:
            embeddings: (batch, seq, hidden_size)

        Raises:
            EmbeddingInputError: if both or neither of input_ids / inputs_embeds are given
        """
        source = EmbeddingInput(input_ids=input_ids, inputs_embeds=inputs_embeds)

        if source.input_ids is not None:
            embeddings = self.word_embeddings(source.input_ids)  # (batch, seq, hidden_size)
        else:
            embeddings = source.inputs_embeds.clone()  # (batch, seq, hidden_size)

        if position_ids is None:
            if source.input_ids is not None:
                position_ids = self.create_position_ids_from_input_ids(source.input_ids)
            else:
                position_ids = self.create_position_ids_from_inputs_embeds(source.inputs_embeds)

        if token_type_ids is None:
            token_type_ids = torch.zeros(
                source.input_shape, dtype=torch.long, device=embeddings.device
            )  # (batch, seq)

        embeddings = (
            embeddings
            + self.position_embeddings(position_ids)
            + self.token_type_embeddings(token_type_ids)
        )  # (batch, seq, hidden_size)
        embeddings = self.LayerNorm(embeddings)  # (batch, seq, hidden_size)
        return self.dropout(embeddings, train)  # (batch, seq, hidden_size)
