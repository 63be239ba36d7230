"""GeoStyle Module Processor Interface

This module defines the abstract base class and data models that every GeoStyle
engine module implements so a host application can configure, run, reset and
inspect it in a uniform way.
"""

from abc import ABC, abstractmethod
from enum import Enum
from pydantic import BaseModel, Field
from typing import Optional, Dict, List, Any
from datetime import datetime


class ModuleState(str, Enum):
    """Operational state reported by a module."""
    READY = "ready"
    RUNNING = "running"
    ERROR = "error"
    DISABLED = "disabled"


class ProcessingResult(BaseModel):
    """Result data model for module processing operations.
    
    This model standardizes the return value from all module processing operations,
    providing consistent success/failure reporting, metrics, and error details.
    """
    
    success: bool = Field(..., description="Whether the processing completed successfully")
    records_processed: int = Field(ge=0, description="Number of features processed")
    errors: List[str] = Field(default_factory=list, description="List of error messages if any")
    metadata: Dict[str, Any] = Field(default_factory=dict, description="Additional processing metadata")
    execution_time: float = Field(ge=0.0, description="Processing execution time in seconds")


class ModuleStatus(BaseModel):
    """Status data model for module health and configuration reporting."""
    
    module_name: str = Field(..., description="Name of the processing module")
    is_configured: bool = Field(..., description="Whether the module is properly configured")
    last_run: Optional[datetime] = Field(None, description="Timestamp of the last successful processing run")
    status: ModuleState = Field(..., description="Current module state")
    health_check: bool = Field(..., description="Result of the most recent health check")
    details: Dict[str, Any] = Field(default_factory=dict, description="Module specific status details")


class ModuleProcessor(ABC):
    """Abstract base class for all GeoStyle processing modules.
    
    Concrete modules own their mutable state and must expose an explicit
    reset so that independent runs (or test cases) never share hidden state.
    """
    
    @abstractmethod
    def __init__(self, config_loader):
        """Initialize module with shared configuration.
        
        Args:
            config_loader: ConfigLoader instance providing access to framework configuration
        """
        pass
    
    @abstractmethod
    def validate_configuration(self) -> bool:
        """Validate module-specific configuration.
        
        Returns:
            bool: True if configuration is valid and complete, False otherwise
        """
        pass
    
    @abstractmethod
    def process(self, dry_run: bool = False) -> ProcessingResult:
        """Execute module processing logic.
        
        Args:
            dry_run: If True, compute results without mutating the features
            
        Returns:
            ProcessingResult: Standardized result object with success status, metrics, and errors
        """
        pass
    
    @abstractmethod
    def reset(self) -> None:
        """Discard all state accumulated by previous runs."""
        pass
    
    @abstractmethod
    def get_status(self) -> ModuleStatus:
        """Get current module processing status.
        
        Returns:
            ModuleStatus: Current module status and health information
        """
        pass
