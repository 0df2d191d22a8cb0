from flask import jsonify, redirect


class Response:
    @staticmethod
    def json(content, status: int = 200):
        response = jsonify(content)
        response.status_code = int(status)
        return response

    @staticmethod
    def redirect_back(location: str, status: int = 303):
        return redirect(location or "/", code=status)
