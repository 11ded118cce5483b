"""Настройки приложения: группы, валидаторы и singleton-реестр."""
