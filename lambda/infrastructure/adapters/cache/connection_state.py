"""
Estado de conexão do Redis compartilhado pelo processo
Escrito apenas pelos eventos de ciclo de vida do cliente, lido por toda operação de cache
"""
import threading


class RedisConnectionState:
    """
    Flag "store acessível" protegida por lock

    Eventos de ciclo de vida:
    - connect / ready: mark_connected()
    - error / end: mark_disconnected()

    Leitores devem tolerar mudança no meio de uma requisição: um get()
    iniciado com o store "up" ainda pode falhar.
    """

    def __init__(self, connected: bool = False):
        self._lock = threading.Lock()
        self._connected = connected

    def is_connected(self) -> bool:
        with self._lock:
            return self._connected

    def mark_connected(self) -> bool:
        """Marca como conectado; retorna True se houve transição"""
        with self._lock:
            changed = not self._connected
            self._connected = True
            return changed

    def mark_disconnected(self) -> bool:
        """Marca como desconectado; retorna True se houve transição"""
        with self._lock:
            changed = self._connected
            self._connected = False
            return changed
