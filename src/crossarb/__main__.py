"""
Entry point for the detection service.

Usage:
    python -m crossarb
    crossarb  # if installed via pip
"""

import sys


def main() -> int:
    """
    Main entry point.

    Returns:
        Exit code (0 for success).
    """
    import uvicorn

    from crossarb import __version__
    from crossarb.api.server import create_app
    from crossarb.config.settings import get_settings
    from crossarb.telemetry.logger import setup_logging

    print(
        f"""
╔═══════════════════════════════════════════════════════════════╗
║     CROSS-VENUE ARBITRAGE DETECTOR v{__version__:<20}      ║
║                                                               ║
║     Aggregator quotes vs. exchange ticker stream              ║
╚═══════════════════════════════════════════════════════════════╝
    """
    )

    try:
        settings = get_settings()
    except Exception as e:
        print(f"Configuration error: {e}")
        return 1

    print("Configuration:")
    print(f"  Venues:         {settings.aggregator_name} / {settings.exchange_name}")
    print(f"  Quote asset:    {settings.quote_asset}")
    print(f"  Fees:           {settings.aggregator_fee_rate * 100:.2f}% / {settings.exchange_fee_rate * 100:.2f}%")
    print(f"  Min profit:     {settings.min_profit_pct:.2f}%")
    print(f"  Max divergence: {settings.max_price_divergence_pct:.1f}%")
    print(f"  Batch:          {settings.batch_size} pairs every {settings.batch_delay:.1f}s")
    print(f"  Listening on:   http://{settings.host}:{settings.port}")
    print()

    async_logger = setup_logging(settings.log_level, settings.log_file)
    try:
        uvicorn.run(
            create_app(settings=settings),
            host=settings.host,
            port=settings.port,
            log_config=None,
        )
    except KeyboardInterrupt:
        print("\nInterrupted by user")
    finally:
        async_logger.stop()

    return 0


if __name__ == "__main__":
    sys.exit(main())
