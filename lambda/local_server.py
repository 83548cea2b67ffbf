#!/usr/bin/env python3
"""
Servidor Local para Desenvolvimento
Simula AWS Lambda + API Gateway localmente usando Flask

Pré-requisitos:
    - Dependências instaladas: pip install -e .
    - Arquivo .env no diretório raiz (WEATHER_API_KEY, REDIS_HOST, ...)
    - Redis opcional: sem ele a API responde normalmente, apenas sem cache

Como usar:
    cd lambda
    python local_server.py

Endpoints disponíveis:
    GET  http://localhost:8000/weather?city=London
    GET  http://localhost:8000/health
"""
import atexit
import json
import os
import sys
from datetime import datetime
from pathlib import Path

# Garantir que o diretório lambda está no path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from flask import Flask, request
from flask_cors import CORS

# .env precisa ser carregado antes de importar settings
from shared.config.env_loader import load_env_file

load_env_file(Path(__file__).resolve().parent.parent / '.env')

from infrastructure.adapters.input.lambda_handler import lambda_handler, shutdown  # noqa: E402

app = Flask(__name__)
# Habilitar CORS para todos os endpoints e origens (desenvolvimento local)
CORS(app, resources={r"/*": {"origins": os.environ.get('CORS_ORIGIN', '*')}})


class MockLambdaContext:
    """Mock do contexto Lambda para execução local"""
    def __init__(self):
        self.aws_request_id = f"local-{datetime.now().timestamp()}"
        self.function_name = "local-weather-api-wrapper"
        self.function_version = "$LATEST"
        self.invoked_function_arn = "arn:aws:lambda:local:000000000000:function:local-weather-api-wrapper"
        self.memory_limit_in_mb = "256"
        self.log_group_name = "/aws/lambda/local-weather-api-wrapper"
        self.log_stream_name = "local"

    def get_remaining_time_in_millis(self):
        return 300000  # 5 minutos


def flask_to_lambda_event(flask_request) -> dict:
    """Converte requisição Flask para evento Lambda/API Gateway"""
    query_string_parameters = {key: value for key, value in flask_request.args.items()}
    multi_value_query_string_parameters = {
        key: flask_request.args.getlist(key) for key in flask_request.args.keys()
    }

    body = flask_request.data.decode('utf-8') if flask_request.data else None
    now = datetime.now()

    return {
        'resource': flask_request.path,
        'path': flask_request.path,
        'httpMethod': flask_request.method,
        'headers': dict(flask_request.headers.items()),
        'queryStringParameters': query_string_parameters or None,
        'multiValueQueryStringParameters': multi_value_query_string_parameters or None,
        'body': body,
        'isBase64Encoded': False,
        'requestContext': {
            'accountId': '000000000000',
            'apiId': 'local',
            'protocol': 'HTTP/1.1',
            'httpMethod': flask_request.method,
            'path': flask_request.path,
            'stage': 'local',
            'requestId': f"local-{now.timestamp()}",
            'requestTime': now.isoformat(),
            'requestTimeEpoch': int(now.timestamp() * 1000),
            'identity': {
                'sourceIp': flask_request.remote_addr,
                'userAgent': flask_request.headers.get('User-Agent', '')
            }
        }
    }


def lambda_to_flask_response(lambda_response: dict):
    """Converte resposta Lambda para resposta Flask"""
    status_code = lambda_response.get('statusCode', 200)
    headers = lambda_response.get('headers', {}) or {}
    body = lambda_response.get('body', '')

    try:
        payload = json.loads(body) if isinstance(body, str) and body else body
    except json.JSONDecodeError:
        return body, status_code, headers

    return app.response_class(
        response=json.dumps(payload),
        status=status_code,
        headers=headers,
        mimetype='application/json'
    )


@app.route('/', defaults={'path': ''}, methods=['GET', 'OPTIONS'])
@app.route('/<path:path>', methods=['GET', 'OPTIONS'])
def proxy(path):
    """Encaminha qualquer rota ao lambda_handler (404 também sai no envelope padrão)"""
    if request.method == 'OPTIONS':
        return '', 200

    event = flask_to_lambda_event(request)
    response = lambda_handler(event, MockLambdaContext())
    return lambda_to_flask_response(response)


atexit.register(shutdown)


if __name__ == '__main__':
    if not os.environ.get('WEATHER_API_KEY'):
        print("⚠️  AVISO: WEATHER_API_KEY não definida - o provider responderá 401")

    port = int(os.environ.get('PORT', 8000))
    host = os.environ.get('HOST', '0.0.0.0')

    print("=" * 70)
    print("🚀 Servidor Local - Weather API Wrapper")
    print("=" * 70)
    print(f"\n📍 Rodando em: http://{host}:{port}")
    print("\n📋 Endpoints disponíveis:")
    print(f"   • GET  http://localhost:{port}/weather?city=London")
    print(f"   • GET  http://localhost:{port}/health")
    print("\n" + "=" * 70 + "\n")

    # Single-thread: o event loop global não pode rodar em duas requisições ao mesmo tempo
    app.run(
        host=host,
        port=port,
        debug=False,
        threaded=False
    )
