# test_config_service.py - settings resolution and precedence

import pytest

from letsencrypt_routeros.constants import ExitCode
from letsencrypt_routeros.exceptions import ConfigurationError, MissingParameterError
from letsencrypt_routeros.services.config_service import ConfigService

REQUIRED_FLAGS = {
    "host": "203.0.113.5",
    "port": "22",
    "private_key": "/home/user/.ssh/id_ed25519",
    "domain": "example.com",
}


def write(path, text):
    path.write_text(text)
    return path


class TestPrecedence:
    """Layering of defaults, files, environment and flags"""

    def test_defaults(self, tmp_path):
        settings = ConfigService(tmp_path, environ={}).resolve(REQUIRED_FLAGS)

        assert settings.user == "admin"
        assert settings.ssh_options == ""
        assert settings.services == ("www-ssl", "api-ssl", "sstp")
        assert settings.certificate == "/etc/letsencrypt/live/example.com/cert.pem"
        assert settings.key == "/etc/letsencrypt/live/example.com/privkey.pem"

    def test_settings_file_wins_over_dotenv(self, tmp_path):
        write(tmp_path / ".env", 'ROUTEROS_HOST="192.0.2.1"\nROUTEROS_USER="dotenv"\n')
        write(
            tmp_path / "letsencrypt-routeros.settings",
            'ROUTEROS_HOST="198.51.100.7"\nROUTEROS_SSH_PORT="2222"\n',
        )

        service = ConfigService(tmp_path, environ={})
        settings = service.resolve(
            {"private_key": "/k", "domain": "example.com"}
        )

        assert settings.host == "198.51.100.7"
        assert settings.port == "2222"
        # keys only in the lower-priority file still apply
        assert settings.user == "dotenv"
        assert [p.name for p in service.find_config_files()] == [
            ".env",
            "letsencrypt-routeros.settings",
        ]

    def test_environment_wins_over_files(self, tmp_path):
        write(tmp_path / ".env", 'ROUTEROS_HOST="192.0.2.1"\nDOMAIN="file.example"\n')

        settings = ConfigService(
            tmp_path, environ={"ROUTEROS_HOST": "203.0.113.9"}
        ).resolve({"port": "22", "private_key": "/k"})

        assert settings.host == "203.0.113.9"
        assert settings.domain == "file.example"

    def test_empty_environment_value_is_ignored(self, tmp_path):
        write(tmp_path / ".env", 'ROUTEROS_HOST="192.0.2.1"\n')

        settings = ConfigService(tmp_path, environ={"ROUTEROS_HOST": ""}).resolve(
            {"port": "22", "private_key": "/k", "domain": "example.com"}
        )

        assert settings.host == "192.0.2.1"

    def test_flags_win_over_environment(self, tmp_path):
        environ = {"ROUTEROS_USER": "env-user", "CERTIFICATE": "/env/cert.pem"}

        settings = ConfigService(tmp_path, environ=environ).resolve(
            {**REQUIRED_FLAGS, "user": "flag-user", "certificate": None}
        )

        assert settings.user == "flag-user"
        # a flag that was not given leaves the lower layer alone
        assert settings.certificate == "/env/cert.pem"

    def test_port_from_environment(self, tmp_path):
        environ = {
            "ROUTEROS_SSH_PORT": "2222",
            "ROUTEROS_HOST": "h",
            "ROUTEROS_PRIVATE_KEY": "/k",
            "DOMAIN": "example.com",
        }

        assert ConfigService(tmp_path, environ=environ).resolve({}).port == "2222"
        # -p still wins
        assert ConfigService(tmp_path, environ=environ).resolve({"port": "8022"}).port == "8022"

    def test_unknown_keys_are_ignored(self, tmp_path):
        write(tmp_path / ".env", 'SOMETHING_ELSE="x"\nROUTEROS_SSH_OPTIONS="-o BatchMode=yes"\n')

        settings = ConfigService(tmp_path, environ={}).resolve(REQUIRED_FLAGS)

        assert settings.ssh_options == "-o BatchMode=yes"
        assert not hasattr(settings, "SOMETHING_ELSE")

    def test_explicit_config_file_wins_over_well_known_files(self, tmp_path):
        write(tmp_path / "letsencrypt-routeros.settings", 'DOMAIN="settings.example"\n')
        write(tmp_path / "site.conf", 'DOMAIN="site.example"\n')

        settings = ConfigService(tmp_path, environ={}, config_file="site.conf").resolve(
            {"host": "h", "port": "22", "private_key": "/k"}
        )

        assert settings.domain == "site.example"

    def test_missing_explicit_config_file(self, tmp_path):
        with pytest.raises(ConfigurationError) as exc_info:
            ConfigService(tmp_path, environ={}, config_file="nope.conf").resolve(REQUIRED_FLAGS)

        assert "nope.conf" in str(exc_info.value)


class TestPositional:
    """Positional arguments fill values that are still empty"""

    def test_all_positional(self, tmp_path):
        settings = ConfigService(tmp_path, environ={}).resolve(
            {}, ("admin", "203.0.113.5", "22", "/k", "example.com")
        )

        assert settings.host == "203.0.113.5"
        assert settings.port == "22"
        assert settings.private_key == "/k"
        assert settings.domain == "example.com"

    def test_named_values_take_precedence(self, tmp_path):
        settings = ConfigService(tmp_path, environ={}).resolve(
            {"host": "198.51.100.7"}, ("ops", "203.0.113.5", "22", "/k", "example.com")
        )

        assert settings.host == "198.51.100.7"
        # user already had its default, so the positional value is unused
        assert settings.user == "admin"
        assert settings.domain == "example.com"

    def test_empty_user_taken_from_position(self, tmp_path):
        settings = ConfigService(tmp_path, environ={}).resolve(
            {**REQUIRED_FLAGS, "user": ""}, ("ops",)
        )

        assert settings.user == "ops"


class TestValidation:
    """Missing and invalid values"""

    @pytest.mark.parametrize(
        "missing, label",
        [
            ("host", "hostname"),
            ("port", "port"),
            ("private_key", "key"),
            ("domain", "domain"),
        ],
    )
    def test_missing_required_value(self, tmp_path, missing, label):
        flags = {k: v for k, v in REQUIRED_FLAGS.items() if k != missing}

        with pytest.raises(MissingParameterError) as exc_info:
            ConfigService(tmp_path, environ={}).resolve(flags)

        assert exc_info.value.field_name == label
        assert exc_info.value.exit_code == ExitCode.CONFIGURATION_ERROR
        assert f"No {label} provided" in str(exc_info.value)

    def test_first_missing_value_is_reported(self, tmp_path):
        with pytest.raises(MissingParameterError) as exc_info:
            ConfigService(tmp_path, environ={}).resolve({})

        assert exc_info.value.field_name == "hostname"

    @pytest.mark.parametrize("port", ["ssh", "0", "70000", "-1", "²", "２２"])
    def test_invalid_port(self, tmp_path, port):
        with pytest.raises(ConfigurationError):
            ConfigService(tmp_path, environ={}).resolve({**REQUIRED_FLAGS, "port": port})

    def test_services_list(self, tmp_path):
        settings = ConfigService(
            tmp_path, environ={"ROUTEROS_SERVICES": " www-ssl, ,sstp "}
        ).resolve(REQUIRED_FLAGS)

        assert settings.services == ("www-ssl", "sstp")

    def test_duplicate_services_rejected(self, tmp_path):
        services = ",".join(["www-ssl"] * 41)

        with pytest.raises(ConfigurationError) as exc_info:
            ConfigService(tmp_path, environ={}).resolve(
                {**REQUIRED_FLAGS, "services": services}
            )

        assert exc_info.value.exit_code == ExitCode.CONFIGURATION_ERROR
        assert "www-ssl" in str(exc_info.value)


class TestDerivedValues:
    """Names derived from the domain"""

    def test_artifacts(self, tmp_path):
        settings = ConfigService(tmp_path, environ={}).resolve(REQUIRED_FLAGS)

        cert = settings.certificate_artifact
        key = settings.key_artifact
        assert (cert.remote_file, cert.store_name) == ("example.com.pem", "example.com.pem_0")
        assert (key.remote_file, key.store_name) == ("example.com.key", "example.com.key_0")
        assert cert.local_path == settings.certificate

    def test_connection(self, tmp_path):
        settings = ConfigService(tmp_path, environ={}).resolve(REQUIRED_FLAGS)

        assert settings.connection.connection_string == "admin@203.0.113.5"
        assert settings.connection.port == "22"
