"""Точка входа в приложение."""
from variant_compare.app import VariantCompareApp
from variant_compare.config import CompareSettings
from variant_compare.logging_utils import configure_logging


def main() -> None:
    """Читает настройки, настраивает журнал и запускает главное окно."""
    settings = CompareSettings.from_env()
    configure_logging(log_file=settings.log_file, verbose=settings.verbose)
    app = VariantCompareApp(settings)
    app.mainloop()


if __name__ == "__main__":
    main()
