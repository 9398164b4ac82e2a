"""
Custom exceptions for Music Catalog Sync

This module defines all custom exceptions used throughout the application
to provide clear error handling and debugging information.
"""

class CatalogError(Exception):
    """Base exception for all Music Catalog Sync errors"""
    
    def __init__(self, message: str, details: str = None, filepath: str = None):
        super().__init__(message)
        self.message = message
        self.details = details
        self.filepath = filepath
    
    def __str__(self):
        parts = [self.message]
        if self.filepath:
            parts.append(f"File: {self.filepath}")
        if self.details:
            parts.append(f"Details: {self.details}")
        return " | ".join(parts)


class ConfigurationError(CatalogError):
    """Raised when the configuration is missing, malformed or invalid"""
    pass


class ServiceError(CatalogError):
    """Raised when a service operation fails"""
    
    def __init__(self, service_name: str, message: str, details: str = None, filepath: str = None):
        super().__init__(message, details, filepath)
        self.service_name = service_name
    
    def __str__(self):
        return f"[{self.service_name}] {super().__str__()}"


class ProbeError(ServiceError):
    """Raised when an audio file cannot be probed"""
    
    def __init__(self, message: str, details: str = None, filepath: str = None):
        super().__init__("AudioProbe", message, details, filepath)


class AudioDecodeError(ProbeError):
    """Raised when the audio stream of a file cannot be decoded"""
    pass


class NoAudioFramesError(AudioDecodeError):
    """Raised when an MP3 file does not contain a single audio frame"""
    pass


class TagReadError(ProbeError):
    """Raised when the embedded tag of a file cannot be read"""
    pass


class SpreadsheetError(ServiceError):
    """Raised when the spreadsheet cannot be opened, found or saved"""
    
    def __init__(self, message: str, details: str = None, filepath: str = None):
        super().__init__("Spreadsheet", message, details, filepath)


class FileOperationError(ServiceError):
    """Raised when file operations fail"""
    
    def __init__(self, message: str, details: str = None, filepath: str = None):
        super().__init__("FileOperations", message, details, filepath)
