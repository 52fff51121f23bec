import sys
import asyncio
import logging
import argparse
from typing import List, Optional

import aiofiles

from config import config
from antdv_docs.crawler.crawler import DocCrawler
from antdv_docs.exceptions import StoreError
from antdv_docs.extraction.data_models import IndexReport, KNOWN_VERSIONS
from antdv_docs.indexer import Indexer
from antdv_docs.storage.store import DocStore

logger = logging.getLogger("indexer")


async def save_report(report: IndexReport, path: str) -> None:
    """Writes the run summary as JSON."""
    async with aiofiles.open(path, "w", encoding="utf-8") as f:
        await f.write(report.model_dump_json(indent=2))
    logger.info(f"Summary saved to {path}")


async def run_index(versions: List[str], db_path: str, summary_path: Optional[str] = None) -> int:
    """Index the given versions and return the process exit code."""
    logger.info(f"Configuration: {config.to_dict()}")

    store = DocStore(db_path)
    try:
        async with DocCrawler() as crawler:
            indexer = Indexer(store, crawler)
            report = await indexer.index_versions(versions)
    finally:
        store.close()

    if summary_path:
        await save_report(report, summary_path)

    aborted = [v.version for v in report.versions if v.aborted]
    if aborted:
        logger.error(f"Indexing failed for: {', '.join(aborted)}")
        return 1

    logger.info("Indexing complete!")
    return 0


def run_serve(db_path: str) -> int:
    from antdv_docs.query.server import AntdvMcpServer
    from antdv_docs.query.service import QueryService

    store = DocStore(db_path, read_only=True)
    try:
        AntdvMcpServer(QueryService(store)).run()
    finally:
        store.close()
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="antdv-docs", description="Ant Design Vue documentation indexer")
    sub = parser.add_subparsers(dest="cmd", required=True)

    index_p = sub.add_parser("index", help="Index documentation for a specific version (v3, v4, or all)")
    index_p.add_argument("version")
    index_p.add_argument("-d", "--db", default=config.DB_PATH, help="Database path")
    index_p.add_argument("--summary", default=None, help="Write a JSON run summary to this path")

    serve_p = sub.add_parser("serve", help="Run the MCP query server on stdio")
    serve_p.add_argument("-d", "--db", default=config.DB_PATH, help="Database path")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, config.LOG_LEVEL, logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    try:
        if args.cmd == "index":
            if args.version == "all":
                versions = list(KNOWN_VERSIONS)
            elif args.version in KNOWN_VERSIONS:
                versions = [args.version]
            else:
                print(f"Invalid version. Use {', '.join(KNOWN_VERSIONS)}, or all", file=sys.stderr)
                return 1
            return asyncio.run(run_index(versions, args.db, args.summary))

        if args.cmd == "serve":
            return run_serve(args.db)
    except StoreError as e:
        logger.error(str(e))
        return 1
    except Exception as e:
        logger.error(f"Indexing failed: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
