#!/usr/bin/env python3
"""Tests unitaires pour le module errors."""

import io
import unittest
from unittest.mock import ANY, MagicMock, patch

from dhcp_scope_sync.errors.base import ErrorHandler, ErrorHandlerChain
from dhcp_scope_sync.errors.exceptions import (ApplicationError,
                                               ConfigurationError,
                                               DeclarationSourceError,
                                               FormatError,
                                               ServerError)
from dhcp_scope_sync.errors.console_handler import ConsoleErrorHandler
from dhcp_scope_sync.errors.logger_handler import LoggerErrorHandler


class TestExceptions(unittest.TestCase):
    """Tests de la hierarchie d'exceptions."""

    def test_heritage(self):
        """Toutes les exceptions heritent de ApplicationError."""
        for error_class in (ConfigurationError, DeclarationSourceError,
                            FormatError):
            self.assertTrue(issubclass(error_class, ApplicationError))
        self.assertTrue(issubclass(ServerError, ApplicationError))

    def test_format_error_est_value_error(self):
        """FormatError reste capturable comme ValueError."""
        with self.assertRaises(ValueError):
            raise FormatError("adresse invalide")

    def test_server_error(self):
        """ServerError conserve l'operation et le message brut."""
        error = ServerError("createScope", "acces refuse")
        self.assertEqual(error.operation, "createScope")
        self.assertEqual(error.message, "acces refuse")
        self.assertEqual(str(error), "createScope: acces refuse")


class TestConsoleErrorHandler(unittest.TestCase):
    """Tests pour ConsoleErrorHandler."""

    def setUp(self):
        self.handler = ConsoleErrorHandler()

    @patch("builtins.print")
    def test_handle_configuration_error(self, mock_print):
        """Verifie le message pour ConfigurationError."""
        self.handler.handle(ConfigurationError("config invalide"))
        calls = [c.args[0] for c in mock_print.call_args_list]
        self.assertIn("\n🛑 ConfigurationError: config invalide", calls)
        self.assertTrue(any("DHCP_SCOPE_SYNC_" in c for c in calls))

    @patch("builtins.print")
    def test_handle_declaration_source_error(self, mock_print):
        """Verifie le message pour DeclarationSourceError."""
        self.handler.handle(DeclarationSourceError("scopes.csv absent"))
        calls = [c.args[0] for c in mock_print.call_args_list]
        self.assertTrue(any("fichier de declarations" in c for c in calls))

    @patch("builtins.print")
    def test_handle_server_error(self, mock_print):
        """Verifie le message pour ServerError."""
        self.handler.handle(ServerError("getScope", "timeout"))
        mock_print.assert_any_call(
            "\n🛑 ServerError: getScope: timeout", file=ANY
        )

    @patch("builtins.print")
    def test_handle_erreur_sans_solution(self, mock_print):
        """Une ApplicationError generique recoit la solution par defaut."""
        self.handler.handle(ApplicationError("inconnue"))
        mock_print.assert_any_call(
            "\n🔧 Solution : Consultez les logs pour plus de details.",
            file=ANY,
        )

    @patch("builtins.print")
    def test_handle_unknown_error(self, mock_print):
        """Verifie le message pour une erreur inattendue."""
        self.handler.handle(RuntimeError("boom"))
        mock_print.assert_any_call(
            "\n💥 Erreur inattendue: boom", file=ANY
        )
        mock_print.assert_any_call(
            "Type: RuntimeError", file=ANY
        )

    def test_flux_personnalise(self):
        """Les messages sont ecrits sur le flux fourni."""
        stream = io.StringIO()
        handler = ConsoleErrorHandler(
            solutions={ServerError: "Relancez le service."},
            stream=stream,
        )
        handler.handle(ServerError("setOptions", "refus"))
        output = stream.getvalue()
        self.assertIn("ServerError: setOptions: refus", output)
        self.assertIn("Relancez le service.", output)

    def test_implements_interface(self):
        """Verifie l'implementation de ErrorHandler."""
        self.assertIsInstance(self.handler, ErrorHandler)


class TestLoggerErrorHandler(unittest.TestCase):
    """Tests pour LoggerErrorHandler."""

    def setUp(self):
        self.logger = MagicMock()
        self.handler = LoggerErrorHandler(self.logger)

    def test_handle_application_error(self):
        """Log une erreur connue avec son type."""
        self.handler.handle(ConfigurationError("config invalide"))
        self.logger.log_error.assert_called_once_with(
            "ConfigurationError: config invalide"
        )

    def test_handle_unknown_error(self):
        """Log une erreur inattendue."""
        self.handler.handle(KeyError("cle"))
        message = self.logger.log_error.call_args.args[0]
        self.assertTrue(message.startswith("Erreur inattendue: KeyError"))


class TestErrorHandlerChain(unittest.TestCase):
    """Tests pour ErrorHandlerChain."""

    def test_diffusion_a_tous_les_handlers(self):
        """Chaque handler recoit l'erreur, dans l'ordre d'ajout."""
        first = MagicMock(spec=ErrorHandler)
        second = MagicMock(spec=ErrorHandler)
        chain = ErrorHandlerChain().add_handler(first).add_handler(second)
        error = ServerError("getScope", "timeout")

        chain.handle(error)

        first.handle.assert_called_once_with(error)
        second.handle.assert_called_once_with(error)
        self.assertEqual(chain.handlers, [first, second])

    def test_handle_and_exit(self):
        """handle_and_exit traite l'erreur puis quitte."""
        handler = MagicMock(spec=ErrorHandler)
        chain = ErrorHandlerChain().add_handler(handler)

        with self.assertRaises(SystemExit) as ctx:
            chain.handle_and_exit(ConfigurationError("x"), exit_code=3)

        self.assertEqual(ctx.exception.code, 3)
        handler.handle.assert_called_once()


if __name__ == "__main__":
    unittest.main()
