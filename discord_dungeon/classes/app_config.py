import json, logging, os
from pathlib import Path

DEFAULT_CONFIG = {
    "log_level": "INFO",
    "cmd_prefix": "+",
    "discord": {
        "api_key": None,
    },
    "dungeon": {
        # The bot's own user id. When unset, the id of the logged-in bot is used.
        "self_id": None,
        "banker_id": None,
        "play_channel_id": None,
        "cost_gp": 5,
    },
    "narrative_engine": {
        "base_url": "https://api.aidungeon.io",
        "email": None,
        "password": None,
        "timeout": 60,
    },
    "database": {
        "uri": None,
    },
    "mysql": {
        "user": "dungeon",
        "password": "dungeon_pwd",
        "hostname": "localhost",
        "dbname": "dungeon_master",
    },
}


class AppConfig:
    flask = None
    def __init__(self, config_path: str = None):
        parent = os.path.dirname(Path(__file__).resolve().parent)
        config_dir = os.path.join(parent, "config")
        self.config_path = config_path or os.path.join(config_dir, "config.json")
        self.example_config_path = os.path.join(config_dir, "example.json")
        self.reload_config()

    @classmethod
    def set_flask(cls, flask):
        cls.flask = flask

    @classmethod
    def get_flask(cls):
        return cls.flask

    @staticmethod
    def merge_dicts(dict1, dict2):
        result = dict1.copy()
        for key, value in dict2.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = AppConfig.merge_dicts(result[key], value)
            else:
                result[key] = value
        return result

    def reload_config(self):
        if not os.path.exists(self.config_path):
            with open(self.example_config_path, "r") as example_file:
                example_config = json.load(example_file)
            with open(self.config_path, "w") as config_file:
                json.dump(example_config, config_file, indent=4)
        with open(self.config_path, "r") as config_file:
            self.config = json.load(config_file)
        self.config = self.merge_dicts(DEFAULT_CONFIG, self.config)

    def get_log_level(self):
        level = self.config.get("log_level", "INFO")
        return getattr(logging, str(level).upper(), logging.ERROR)

    def get_command_prefix(self):
        return self.config.get("cmd_prefix", "+")

    def get_discord_api_key(self):
        return self.config.get("discord", {}).get("api_key", None)

    @staticmethod
    def _as_id(value):
        # Discord snowflakes are ints in JSON but compared as strings everywhere else.
        if value is None or value == "":
            return None
        return str(value)

    def get_self_id(self):
        return self._as_id(self.config.get("dungeon", {}).get("self_id"))

    def get_banker_id(self):
        return self._as_id(self.config.get("dungeon", {}).get("banker_id"))

    def get_play_channel_id(self):
        return self._as_id(self.config.get("dungeon", {}).get("play_channel_id"))

    def get_cost_gp(self) -> int:
        return int(self.config.get("dungeon", {}).get("cost_gp", 5))

    def get_engine_base_url(self):
        return self.config.get("narrative_engine", {}).get("base_url", "https://api.aidungeon.io").rstrip("/")

    def get_engine_email(self):
        return self.config.get("narrative_engine", {}).get("email", None)

    def get_engine_password(self):
        return self.config.get("narrative_engine", {}).get("password", None)

    def get_engine_timeout(self) -> float:
        return float(self.config.get("narrative_engine", {}).get("timeout", 60))

    def get_mysql_user(self):
        return self.config.get("mysql", {}).get("user", "dungeon")

    def get_mysql_password(self):
        return self.config.get("mysql", {}).get("password", "dungeon_pwd")

    def get_mysql_hostname(self):
        return self.config.get("mysql", {}).get("hostname", "localhost")

    def get_mysql_dbname(self):
        return self.config.get("mysql", {}).get("dbname", "dungeon_master")

    def get_database_uri(self):
        uri = self.config.get("database", {}).get("uri")
        if uri:
            return uri
        return 'mysql+mysqlconnector://' + str(self.get_mysql_user()) + ':' + str(self.get_mysql_password()) + '@' + str(self.get_mysql_hostname()) + '/' + str(self.get_mysql_dbname())
