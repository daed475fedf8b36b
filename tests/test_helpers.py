import datetime
import json
import logging
from pathlib import Path

import pytest
from decouple import config

from noteflow import helpers
from noteflow.helpers import DateUtil

TEST_ENV = config('TEST_ENV', default='remote')


class TestHelpers:

    @pytest.fixture
    def data_location(self, tmp_path, monkeypatch):
        location = tmp_path / 'NoteFlow'
        monkeypatch.setattr(helpers, 'DATA_LOCATION', location)
        return location

    @pytest.mark.skipif(TEST_ENV != 'local', reason="Writes to the user's data folder")
    def test_default_settings_folder(self):
        result = helpers.settings_folder()
        assert isinstance(result, Path)
        assert result.name == "NoteFlow"
        assert result.is_dir()

    def test_settings_folder(self, data_location):
        result = helpers.settings_folder()
        assert result == data_location
        assert data_location.is_dir()

    def test_db_folder(self, data_location):
        result = helpers.db_folder()
        assert isinstance(result, Path)
        assert result == data_location / "noteflow.db"

        result = helpers.db_folder({'database': ''})
        assert result == data_location / "noteflow.db"

        result = helpers.db_folder({'database': '/srv/notes/mine.db'})
        assert result == Path('/srv/notes/mine.db')

    def test_log_folder(self, data_location):
        result = helpers.log_folder()
        assert result == data_location / "logs"
        assert result.is_dir()

    def test_bootstrap_settings(self, data_location):
        helpers.bootstrap_settings()
        conf_file = data_location / "conf.json"
        with open(conf_file) as fp:
            assert json.load(fp) == helpers.SETTINGS_DEFAULTS

        # Existing settings are left alone
        with open(conf_file, 'w') as fp:
            json.dump({'log_level': 'debug'}, fp)
        helpers.bootstrap_settings()
        with open(conf_file) as fp:
            assert json.load(fp) == {'log_level': 'debug'}

    def test_load_settings(self, data_location, caplog):
        # No file
        assert helpers.load_settings() == helpers.SETTINGS_DEFAULTS

        # Partial file
        data_location.mkdir(parents=True, exist_ok=True)
        conf_file = data_location / "conf.json"
        with open(conf_file, 'w') as fp:
            json.dump({'log_level': 'debug', 'theme': 'dark'}, fp)
        settings = helpers.load_settings()
        assert settings['log_level'] == 'debug'
        assert settings['theme'] == 'dark'
        assert settings['database'] == ''

        # Invalid file
        with open(conf_file, 'w') as fp:
            fp.write("{ not json")
        with caplog.at_level(logging.CRITICAL):
            settings = helpers.load_settings()
        assert settings == helpers.SETTINGS_DEFAULTS
        assert 'invalid' in caplog.text

        # Defaults are not modified
        settings['theme'] = 'light'
        assert helpers.SETTINGS_DEFAULTS['theme'] == 'auto'

    def test_validate_title(self):
        assert helpers.validate_title("Groceries") == (True, "Groceries")
        assert helpers.validate_title("  Groceries \n") == (True, "Groceries")

        for title in ["", "   ", "\n\t", None]:
            success, data = helpers.validate_title(title)
            assert success is False
            assert data == helpers.EMPTY_TITLE_MESSAGE

    def test_now(self):
        now = DateUtil.now()
        assert isinstance(now, datetime.datetime)
        assert now.microsecond % 1000 == 0
        assert DateUtil.from_epoch_ms(DateUtil.to_epoch_ms(now)) == now

    def test_convert(self):
        existing_date = datetime.datetime(2024, 5, 24, 9, 54, 59, 123000)
        millis = DateUtil.to_epoch_ms(existing_date)
        assert isinstance(millis, int)
        assert millis % 1000 == 123
        assert DateUtil.from_epoch_ms(millis) == existing_date

        whole_second = datetime.datetime(2024, 5, 24, 9, 54, 59)
        assert DateUtil.to_epoch_ms(whole_second) == int(whole_second.timestamp()) * 1000
        assert DateUtil.from_epoch_ms(0) == datetime.datetime.fromtimestamp(0)

        # Sub-millisecond precision is dropped
        precise = datetime.datetime(2024, 5, 24, 9, 54, 59, 123999)
        assert DateUtil.from_epoch_ms(DateUtil.to_epoch_ms(precise)) == existing_date

    def test_display(self):
        assert DateUtil.display(datetime.datetime(2024, 5, 24, 9, 54, 59)) == "24 May 2024, 09:54"

    def test_emit(self):
        received = []
        logger = logging.getLogger()
        previous_level = logger.level
        logger.setLevel(logging.DEBUG)
        func_handler = helpers.FunctionHandler(lambda msg: received.append(msg))
        logger.addHandler(func_handler)

        logger.critical("test")
        logger.removeHandler(func_handler)
        logger.setLevel(previous_level)
        assert received == ["test"]
