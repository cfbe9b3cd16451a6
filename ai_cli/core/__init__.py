"""
Modelo de sessão: mensagens, transcript, sessão e tarefas avulsas.
"""
