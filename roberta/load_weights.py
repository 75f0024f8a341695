"""
Load RoBERTa embedding weights from HuggingFace safetensors checkpoints
"""

import json

import torch
from huggingface_hub import hf_hub_download
from huggingface_hub.errors import EntryNotFoundError
from safetensors import safe_open

# Full models prefix with "roberta.", bare encoders don't
EMBEDDING_PREFIXES = ("roberta.embeddings.", "embeddings.")

# Older TF-converted checkpoints name LayerNorm parameters gamma/beta
LEGACY_NAMES = {"LayerNorm.gamma": "LayerNorm.weight", "LayerNorm.beta": "LayerNorm.bias"}

# Buffers some checkpoints serialize alongside the weights
SKIPPED_NAMES = ("position_ids", "token_type_ids")


def list_weight_files(repo_id: str) -> list[str]:
    """
    List all weight files in the HuggingFace repo

    Returns:
        Sorted list of safetensors filenames
    """
    try:
        index_path = hf_hub_download(repo_id, "model.safetensors.index.json")
    except EntryNotFoundError:
        # No index means the weights fit in a single file
        return ["model.safetensors"]

    with open(index_path, "r", encoding="utf-8") as f:
        index = json.load(f)

    return sorted(set(index["weight_map"].values()))


def strip_embedding_prefix(name: str) -> str | None:
    """
    Map a checkpoint parameter name to a RobertaEmbeddings state dict key

    Example: "roberta.embeddings.LayerNorm.gamma" -> "LayerNorm.weight"

    Returns:
        The stripped name, or None if the parameter isn't an embedding weight
    """
    for prefix in EMBEDDING_PREFIXES:
        if name.startswith(prefix):
            key = name[len(prefix):]
            if key in SKIPPED_NAMES:
                return None
            return LEGACY_NAMES.get(key, key)
    return None


def read_embedding_weights(path: str, device: str | torch.device) -> dict[str, torch.Tensor]:
    """
    Read only the embedding tensors from one safetensors file

    Args:
        path: Local path to a .safetensors file
        device: Device to load tensors to

    Returns:
        Dictionary mapping state dict keys to tensors
        Example: {"word_embeddings.weight": tensor(...), ...}
    """
    weights: dict[str, torch.Tensor] = {}

    # safe_open requires device as string, not torch.device object
    with safe_open(path, framework="pt", device=str(device)) as f:
        for name in f.keys():
            key = strip_embedding_prefix(name)
            if key is not None:
                weights[key] = f.get_tensor(name)

    return weights


def load_embedding_weights(
    repo_id: str,
    device: str | torch.device,
) -> dict[str, torch.Tensor]:
    """
    Load the embedding weights of a HuggingFace RoBERTa checkpoint

    Args:
        repo_id: HuggingFace model repository ID
        device: Device to load weights to ("cpu", "cuda", ...)

    Returns:
        Dictionary mapping state dict keys to tensors
    """
    weights: dict[str, torch.Tensor] = {}

    for weight_file in list_weight_files(repo_id):
        weight_path = hf_hub_download(repo_id, weight_file)
        weights.update(read_embedding_weights(weight_path, device))

    return weights
