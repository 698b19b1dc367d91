"""Tests pour le module logging."""

import logging

from dhcp_scope_sync.logging import FileLogger, Logger


class TestFileLogger:
    """Tests pour FileLogger."""

    def test_implements_logger_interface(self, tmp_path):
        """Verifie que FileLogger implemente l'interface Logger."""
        logger = FileLogger(str(tmp_path / "test.log"))
        assert isinstance(logger, Logger)
        logger.close()

    def test_log_info(self, tmp_path):
        """Test du logging info."""
        log_file = tmp_path / "test.log"
        logger = FileLogger(str(log_file))

        logger.log_info("Test message")

        content = log_file.read_text(encoding="utf-8")
        assert "INFO" in content
        assert "Test message" in content
        logger.close()

    def test_log_warning_et_error(self, tmp_path):
        """Test du logging warning et error."""
        log_file = tmp_path / "test.log"
        logger = FileLogger(str(log_file))

        logger.log_warning("Warning message")
        logger.log_error("Error message")

        content = log_file.read_text(encoding="utf-8")
        assert "WARNING - Warning message" in content
        assert "ERROR - Error message" in content
        logger.close()

    def test_niveau_filtre(self, tmp_path):
        """Les messages sous le niveau configure sont ignores."""
        log_file = tmp_path / "test.log"
        logger = FileLogger(str(log_file), level="warning")

        logger.log_info("ignore")
        logger.log_warning("garde")

        content = log_file.read_text(encoding="utf-8")
        assert "ignore" not in content
        assert "garde" in content
        logger.close()

    def test_log_debug(self, tmp_path):
        """Les traces de diagnostic n'apparaissent qu'en DEBUG."""
        quiet_file = tmp_path / "info.log"
        quiet = FileLogger(str(quiet_file))
        quiet.log_debug("cache")
        assert "cache" not in quiet_file.read_text(encoding="utf-8")
        quiet.close()

        verbose_file = tmp_path / "debug.log"
        verbose = FileLogger(str(verbose_file), level="DEBUG")
        verbose.log_debug("visible")
        assert "DEBUG - visible" in verbose_file.read_text(encoding="utf-8")
        verbose.close()

    def test_cree_le_repertoire(self, tmp_path):
        """Le repertoire du fichier de log est cree si besoin."""
        log_file = tmp_path / "logs" / "sync" / "test.log"
        logger = FileLogger(str(log_file))
        logger.log_info("ok")
        assert log_file.exists()
        logger.close()

    def test_utf8(self, tmp_path):
        """Les caracteres non ASCII sont ecrits en UTF-8."""
        log_file = tmp_path / "test.log"
        logger = FileLogger(str(log_file))
        logger.log_info("Etendue réseau créée")
        assert "réseau" in log_file.read_text(encoding="utf-8")
        logger.close()

    def test_format_personnalise(self, tmp_path):
        log_file = tmp_path / "test.log"
        logger = FileLogger(
            str(log_file), log_format="[%(levelname)s] %(message)s"
        )
        logger.log_info("msg")
        assert log_file.read_text(encoding="utf-8") == "[INFO] msg\n"
        logger.close()

    def test_pas_de_handlers_dupliques(self, tmp_path):
        """Deux instances sur le meme fichier partagent les handlers."""
        log_file = str(tmp_path / "test.log")
        first = FileLogger(log_file)
        second = FileLogger(log_file)
        assert len(second.handlers) == 1
        assert second.handlers == first.handlers
        first.close()

    def test_sortie_console(self, tmp_path):
        """console_output ajoute un StreamHandler au fichier."""
        logger = FileLogger(str(tmp_path / "test.log"), console_output=True)
        kinds = {type(h) for h in logger.handlers}
        assert logging.FileHandler in kinds
        assert logging.StreamHandler in kinds
        assert logger.logger.propagate is False
        logger.close()

    def test_console_seule(self):
        """Sans fichier, seule la console est active."""
        logger = FileLogger()
        assert [type(h) for h in logger.handlers] == [logging.StreamHandler]
        logger.close()

    def test_handlers_etrangers_ignores(self, tmp_path):
        """Un handler ajoute par un tiers n'est ni adopte ni ferme."""
        log_file = str(tmp_path / "test.log")
        foreign = logging.NullHandler()
        logging.getLogger(f"dhcp_scope_sync.{log_file}").addHandler(foreign)

        logger = FileLogger(log_file)

        assert [type(h) for h in logger.handlers] == [logging.FileHandler]
        logger.close()
        assert logger.logger.handlers == [foreign]
        logger.logger.removeHandler(foreign)

    def test_close(self, tmp_path):
        """close() detache les handlers."""
        logger = FileLogger(str(tmp_path / "test.log"))
        owned = list(logger.handlers)
        logger.close()
        assert logger.handlers == []
        assert not any(h in logger.logger.handlers for h in owned)
