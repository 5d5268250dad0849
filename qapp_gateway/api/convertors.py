from starlette.convertors import Convertor, register_url_convertor


class AppNameConvertor(Convertor):
    """Nom d'application: minuscules, chiffres et tirets, commence par une lettre, ne finit pas par un tiret"""
    regex = "[a-z](?:[-a-z0-9]*[a-z0-9])?"

    def convert(self, value: str) -> str:
        return value

    def to_string(self, value: str) -> str:
        return str(value)


register_url_convertor("app_name", AppNameConvertor())
