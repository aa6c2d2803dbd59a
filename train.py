"""Train a Markov sentence model from text files or a Hugging Face dataset."""

import argparse
import json
import logging
from pathlib import Path

from datasets import load_dataset

from markovtalk import SentenceSynthesizer, SynthesizerConfig, TrainMode

# Configure logging to show INFO level and above.
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%H:%M:%S",
)


def load_corpus(
    dataset: str, split: str, text_column: str, num_docs: int | None
) -> list[str]:
    """Load up to `num_docs` documents via dataset indexing; full dataset when None."""
    print(f"Loading {dataset} ({split}) …")
    ds = load_dataset(dataset, split=split)
    if num_docs is not None:
        return ds[:num_docs][text_column]
    return ds[text_column]


def main() -> None:
    """Index the corpus, train the model and save it."""
    parser = argparse.ArgumentParser(description="Train a markovtalk model.")
    parser.add_argument(
        "--input",
        type=Path,
        action="append",
        default=[],
        help="Text file to index (repeatable).",
    )
    parser.add_argument(
        "--dataset",
        type=str,
        default=None,
        help="Hugging Face dataset name to index instead of / in addition to files.",
    )
    parser.add_argument("--split", type=str, default="train")
    parser.add_argument("--text-column", type=str, default="text")
    parser.add_argument(
        "--num-docs",
        type=int,
        default=None,
        help="Number of dataset documents to index (default: full dataset).",
    )
    parser.add_argument(
        "--model",
        type=Path,
        default=Path("data/markov.json"),
        help="Model file to write (default: data/markov.json).",
    )
    parser.add_argument("--state-size", type=int, default=2)
    parser.add_argument(
        "--mode",
        type=str,
        default=TrainMode.FULL.value,
        help="Train mode: full or incremental.",
    )
    parser.add_argument(
        "--nicknames",
        type=str,
        default=None,
        help='Alias groups as JSON, e.g. \'[["Bob", "Robert"]]\'.',
    )
    parser.add_argument(
        "--resume",
        action="store_true",
        help="Load the existing model first and add counts onto it.",
    )
    args = parser.parse_args()

    if not args.input and not args.dataset:
        parser.error("nothing to train on: pass --input and/or --dataset")

    alias_groups = json.loads(args.nicknames) if args.nicknames else None

    config = SynthesizerConfig(
        state_size=args.state_size,
        model_path=args.model,
        train_mode=TrainMode.get(args.mode),
    )
    synth = SentenceSynthesizer(config)
    if args.resume:
        synth.load(missing_ok=True)

    for path in args.input:
        synth.index(path.read_text(encoding="utf-8"), alias_groups)
    if args.dataset:
        for doc in load_corpus(args.dataset, args.split, args.text_column, args.num_docs):
            synth.index(doc, alias_groups)

    print(f"Indexed {len(synth.history):,} sentences")
    synth.train()
    synth.save()
    print(f"Saved {len(synth.model):,} states, {len(synth.vocabulary()):,} words to {args.model}")


if __name__ == "__main__":
    main()
