"""Print the message hidden in a stored image."""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

from stegvault.config import get_settings
from stegvault.errors import StegVaultError
from stegvault.services.annotator import LsbAnnotator
from stegvault.services.codec import PillowCodec
from stegvault.services.pipeline import RetrievalPath
from stegvault.services.storage import build_store


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Reveal the message embedded in a stegvault image")
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--key", help="content key of an image in the configured store")
    source.add_argument("--path", type=Path, help="PNG file downloaded from /raw")
    args = parser.parse_args(argv)

    annotator = LsbAnnotator()
    try:
        if args.path is not None:
            text = annotator.reveal(args.path.read_bytes())
        else:
            settings = get_settings()
            retrieval = RetrievalPath(
                PillowCodec(quality=settings.jpeg_quality),
                annotator,
                build_store(settings),
                key_length=settings.key_length,
            )
            text = retrieval.reveal(args.key)
    except (StegVaultError, OSError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    print(text)
    return 0
