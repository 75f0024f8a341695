"""Shared test fixtures"""

import pytest
import torch

from roberta.config import RobertaConfig


@pytest.fixture
def config():
    """Small config so tests run without downloading anything"""
    return RobertaConfig(
        vocab_size=32,
        hidden_size=16,
        max_position_embeddings=24,
        type_vocab_size=2,
        hidden_dropout_prob=0.1,
    )


@pytest.fixture
def embeddings(config):
    """Randomly initialized embedding layer"""
    from roberta.embeddings import RobertaEmbeddings

    torch.manual_seed(0)
    return RobertaEmbeddings(config)


@pytest.fixture(scope="session")
def pretrained_embeddings():
    """
    Load roberta-base embeddings (shared across entire test session)

    Only loaded once when first needed by any test that uses this fixture.
    """
    from roberta.embeddings import RobertaEmbeddings

    return RobertaEmbeddings.from_pretrained("FacebookAI/roberta-base", device="cpu")
