"""
Simple example of embedding a padded batch with pretrained roberta-base weights

This script shows how padding affects the derived position ids.
"""

import torch
from roberta.embeddings import RobertaEmbeddings


def describe_batch(embeddings: RobertaEmbeddings, input_ids: torch.Tensor) -> None:
    """
    Print the derived position ids and embedding statistics for a batch

    Args:
        embeddings: The RobertaEmbeddings instance
        input_ids: Token ids, shape (batch, seq), padded with 1
    """
    position_ids = embeddings.create_position_ids_from_input_ids(input_ids)  # (batch, seq)

    with torch.no_grad():
        output = embeddings(input_ids=input_ids)  # (batch, seq, hidden_size)

    for row in range(input_ids.shape[0]):
        print(f"Input ids:    {input_ids[row].tolist()}")
        print(f"Position ids: {position_ids[row].tolist()}")
        print(f"Norms:        {[round(n, 2) for n in output[row].norm(dim=-1).tolist()]}")
        print()


def main() -> None:
    """Main function"""
    device = "cuda" if torch.cuda.is_available() else "cpu"

    print("Loading roberta-base embeddings...")
    embeddings = RobertaEmbeddings.from_pretrained("FacebookAI/roberta-base", device=device)
    print(f"Loaded on {device}\n")

    # <s> Hello world </s> and <s> Hello </s>, right-padded with <pad> (id 1)
    input_ids = torch.tensor(
        [[0, 31414, 232, 2, 1], [0, 31414, 2, 1, 1]],
        device=device,
    )
    describe_batch(embeddings, input_ids)


if __name__ == "__main__":
    main()
