"""
Model configuration for RoBERTa embeddings
"""

import json
from dataclasses import dataclass, fields

from huggingface_hub import hf_hub_download


@dataclass(frozen=True)
class RobertaConfig:
    """
    Subset of a HuggingFace RoBERTa config.json used by the embedding layer

    Attributes:
        vocab_size: Number of tokens in vocabulary (50265 for roberta-base)
        hidden_size: Embedding dimension (768 for roberta-base)
        max_position_embeddings: Size of the position table (514 for roberta-base)
        type_vocab_size: Number of segment types (1 for roberta-base)
        hidden_dropout_prob: Dropout probability applied after LayerNorm
        pad_token_id: Padding token id (always 1 for RoBERTa checkpoints)
    """

    vocab_size: int
    hidden_size: int
    max_position_embeddings: int
    type_vocab_size: int
    hidden_dropout_prob: float
    pad_token_id: int = 1

    @classmethod
    def from_dict(cls, config: dict) -> "RobertaConfig":
        """
        Build a config from a parsed config.json, ignoring unrelated keys

        Raises:
            KeyError: if a required field is missing
        """
        values = {}
        for field in fields(cls):
            if field.name in config:
                values[field.name] = config[field.name]
            elif field.name != "pad_token_id":
                raise KeyError(field.name)
        return cls(**values)


def load_config(repo_id: str) -> RobertaConfig:
    """Download config.json from HuggingFace and parse it"""
    config_path = hf_hub_download(repo_id, "config.json")
    with open(config_path, "r", encoding="utf-8") as f:
        return RobertaConfig.from_dict(json.load(f))
