"""Main entry point for the layercache command line.

Sets up the Typer CLI application, wires configuration, logging and the
console display (Composition Root), and defines the CLI commands.
"""

import logging
from dataclasses import replace
from typing import Annotated, Any, Dict, Optional

import typer

from layercache.core.cache_builder import build_cache, describe_layers
from layercache.core.cache_factory import CacheFactory, get_typed, set_typed
from layercache.core.clock import ManualClock
from layercache.domain.exceptions import CacheConfigurationError, LayerCacheError
from layercache.domain.interfaces.user_interface import UserInterface
from layercache.infrastructure.cli.display import ConsoleDisplay
from layercache.infrastructure.config.settings import get_cache_options, get_config, load_configuration
from layercache.infrastructure.monitoring.logger_setup import (
    DEFAULT_BACKUP_COUNT,
    DEFAULT_LOG_FORMAT,
    DEFAULT_MAX_BYTES,
    resolve_log_level,
    setup_logging,
)

logger = logging.getLogger(__name__)

# --- Dependency Injection Container (Manual) ---

_dependencies: Dict[str, Any] = {}


def create_dependencies() -> Dict[str, Any]:
    """Creates the UI, then loads configuration and configures logging.

    This acts as the Composition Root. A configuration error is shown on
    the UI and ends the command with exit code 1.
    """
    ui = ConsoleDisplay()
    try:
        load_configuration()
        setup_logging(
            log_level=resolve_log_level(get_config('logging.level', 'WARNING')),
            log_format=get_config('logging.format', DEFAULT_LOG_FORMAT),
            log_file=get_config('logging.file'),
            max_bytes=_as_log_setting('logging.max_bytes', DEFAULT_MAX_BYTES),
            backup_count=_as_log_setting('logging.backup_count', DEFAULT_BACKUP_COUNT),
        )
    except LayerCacheError as e:
        logger.error(f"Fatal error during initialization: {e}")
        ui.display_error(f"Invalid configuration: {e}")
        raise typer.Exit(code=1)
    logger.info("Configuration and logging initialized.")
    return {'ui': ui}


def _as_log_setting(key: str, default: int) -> int:
    value = get_config(key, default)
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise CacheConfigurationError(f"Config '{key}' must be a non-negative integer, got {value!r}")
    return value


def get_dependencies() -> Dict[str, Any]:
    if not _dependencies:
        _dependencies.update(create_dependencies())
    return _dependencies


# --- Typer App Definition ---
app = typer.Typer(
    name="layercache",
    help="layercache: in-process caches composed from LRU, TTL, bulk-expiry and thread-safety layers.",
    add_completion=False,
)


def run_demo(ui: UserInterface) -> None:
    """Walks through each cache layer and prints what it observes."""
    simple_cache = CacheFactory.perpetual()
    simple_cache.set("key1", "value1")
    ui.display_output(f"Simple cache: {simple_cache.get('key1')}", title="PerpetualCache")

    lru_cache = CacheFactory.lru(max_size=3)
    for key in ("a", "b", "c", "d"):
        lru_cache.set(key, key.upper())
    ui.display_output(
        f"LRU cache size: {lru_cache.size}\n"
        f"LRU cache contains 'a': {lru_cache.contains_key('a')}\n"
        f"LRU cache contains 'd': {lru_cache.contains_key('d')}",
        title="LRUCache (capacity 3)",
    )

    clock = ManualClock()
    ttl_cache = CacheFactory.ttl(ttl=2, clock=clock)
    ttl_cache.set("temp", "temporary value")
    before = ttl_cache.get("temp")
    clock.advance(2)
    ui.display_output(
        f"TTL cache before expiry: {before}\n"
        f"TTL cache after 2s: {ttl_cache.get('temp')}\n"
        f"TTL cache contains 'temp': {ttl_cache.contains_key('temp')}",
        title="TTLCache (2s)",
    )

    advanced_cache = CacheFactory.builder().max_size(50).ttl(30).thread_safe().build()
    advanced_cache.set("complex", "Complex cache with multiple features")
    set_typed(advanced_cache, "number", 42, int)
    ui.display_output(
        f"Advanced cache: {advanced_cache.get('complex')}\n"
        f"Type-safe retrieval: {get_typed(advanced_cache, 'number', int)}\n"
        f"Layers: {' -> '.join(describe_layers(advanced_cache))}",
        title="Builder",
    )


# --- CLI Commands ---

@app.command()
def demo():
    """Run the cache demonstration scenarios."""
    ui: UserInterface = get_dependencies()['ui']
    ui.display_info("=== Cache Demo ===")
    run_demo(ui)


@app.command(name="show-config")
def show_config(
    capacity: Annotated[Optional[int], typer.Option(help="Maximum number of entries (LRU).")] = None,
    ttl: Annotated[Optional[float], typer.Option(help="Default per-entry TTL in seconds.")] = None,
    flush_interval: Annotated[Optional[float], typer.Option(help="Bulk flush interval in seconds.")] = None,
    thread_safe: Annotated[Optional[bool], typer.Option("--thread-safe/--no-thread-safe", help="Wrap the chain in a lock.")] = None,
):
    """Show the resolved cache options and the layer chain they build."""
    ui: UserInterface = get_dependencies()['ui']
    try:
        options = get_cache_options()
        overrides = {
            name: value
            for name, value in (
                ('capacity', capacity),
                ('ttl', ttl),
                ('flush_interval', flush_interval),
                ('thread_safe', thread_safe),
            )
            if value is not None
        }
        options = replace(options, **overrides)
        cache = build_cache(options)
    except LayerCacheError as e:
        logger.error(f"Invalid cache configuration: {e}")
        ui.display_error(f"Invalid cache configuration: {e}")
        raise typer.Exit(code=1)

    ui.display_table(
        "Cache options",
        ["Setting", "Value"],
        [
            ["capacity", options.capacity if options.capacity is not None else "-"],
            ["ttl (s)", options.ttl if options.ttl is not None else "-"],
            ["flush interval (s)", options.flush_interval if options.flush_interval is not None else "-"],
            ["thread safe", options.thread_safe],
        ],
    )
    ui.display_table(
        "Layer chain (outermost first)",
        ["#", "Layer"],
        [[i, name] for i, name in enumerate(describe_layers(cache), start=1)],
    )


# --- Main Execution Guard ---

def cli_entry_point():
    """Function to be called by the script entry point in pyproject.toml."""
    app()


if __name__ == "__main__":
    cli_entry_point()
