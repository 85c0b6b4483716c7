#!/usr/bin/env python3
"""
Vector loading utility.
Streams a fastText .vec source into the SQLite vector store, optionally
bounded by a word list.
"""

import argparse
import sys

import dotenv
dotenv.load_dotenv()

from kosemantic.core import config
from kosemantic.core.errors import VectorSourceError
from kosemantic.core.validator import load_word_list
from kosemantic.vector.store import EmbeddingStore


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Load Korean word vectors into the scoring store",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s                                   # Load VECTOR_SOURCE_PATH into VECTOR_DB_PATH
  %(prog)s --source cc.ko.300.vec.gz         # Load a gzipped source
  %(prog)s --words data/ko.dic               # Only words listed in the dictionary
  %(prog)s --reset                           # Clear the store before loading

Only Hangul words up to WORD_MAX_LENGTH characters are stored.
Malformed lines are skipped and counted.
        """
    )

    parser.add_argument(
        "--source", "-s",
        default=config.VECTOR_SOURCE_PATH,
        help="Vector source file (.vec or .vec.gz)"
    )

    parser.add_argument(
        "--db",
        default=config.VECTOR_DB_PATH,
        help="SQLite vector database path"
    )

    parser.add_argument(
        "--words", "-w",
        help="Word list or .dic file bounding what gets loaded"
    )

    parser.add_argument(
        "--dimension", "-d",
        type=int,
        default=config.VECTOR_DIMENSION,
        help="Expected vector dimension"
    )

    parser.add_argument(
        "--reset",
        action="store_true",
        help="Remove existing vectors before loading"
    )

    args = parser.parse_args(argv)

    store = EmbeddingStore(
        db_path=args.db,
        dimension=args.dimension,
        max_word_length=config.WORD_MAX_LENGTH,
    ).open()

    target_words = None
    if args.words:
        try:
            target_words = load_word_list(args.words)
        except OSError as e:
            print(f"ERROR: Cannot read word list {args.words}: {e}")
            sys.exit(1)
        print(f"Restricting load to {len(target_words)} words from {args.words}")

    if args.reset:
        store.reset()
        print("✓ Cleared existing vectors")

    print(f"Loading vectors from {args.source}...")
    try:
        inserted = store.load_bulk(args.source, target_words)
    except VectorSourceError as e:
        print(f"ERROR: {e}")
        sys.exit(1)

    print(f"✓ Inserted {inserted} vectors")
    print(f"✓ Store now holds {store.vector_count()} vectors ({store.provenance})")
    return inserted


if __name__ == "__main__":
    main()
