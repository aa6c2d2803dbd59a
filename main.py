"""Generate sentences from a saved markovtalk model."""

import argparse
import logging
from pathlib import Path

import markovtalk as mt


def main() -> None:
    """Load a model and print generated sentences or correction candidates."""
    parser = argparse.ArgumentParser(description="Generate sentences from a model.")
    parser.add_argument("--model", type=Path, default=Path("data/markov.json"))
    parser.add_argument("--state-size", type=int, default=2)
    parser.add_argument("--topic", type=str, default=None)
    parser.add_argument("--count", type=int, default=5)
    parser.add_argument("--min-length", type=int, default=1)
    parser.add_argument("--max-length", type=int, default=150)
    parser.add_argument(
        "--corrections",
        action="store_true",
        help="Print correction candidates instead of sentences.",
    )
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%H:%M:%S",
    )

    synth = mt.SentenceSynthesizer(
        mt.SynthesizerConfig(state_size=args.state_size, model_path=args.model)
    )
    synth.load()

    if args.corrections:
        for word, candidates in synth.correction_candidates().items():
            print(f"{word}: {', '.join(candidates)}")
        return

    # a loaded model has no history, so overlap checks pass trivially
    for _ in range(args.count):
        sentence = synth.make_sentence(args.topic, args.min_length, args.max_length)
        print(sentence if sentence is not None else "<no sentence>")


if __name__ == "__main__":
    main()
