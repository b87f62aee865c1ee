# SPDX-FileCopyrightText: Copyright (c) 2025 NBEL
# SPDX-License-Identifier: Apache-2.0
#
# Base solver class for 2D wave simulations

class SolverBase:
    """
    Generic base class for 2D solvers.
    
    Holds the model being simulated and defines the interface that concrete
    solvers must implement.
    """
    
    def __init__(self, model):
        """
        Initialize the solver with a model.
        
        Args:
            model: The 2D Model object containing system description
        """
        self.model = model
    
    @property
    def device(self):
        """
        Get the device used by the solver.
        
        Returns:
            The device used by the solver
        """
        return self.model.device
    
    def step(self, state, pointer, radius: float, strength: float):
        """
        Advance the model by one frame.
        
        Must be implemented by concrete solver subclasses.
        
        Args:
            state: The live state, updated in place
            pointer: Pointer driving the simulation
            radius: Pointer influence radius
            strength: Pointer force multiplier
        """
        raise NotImplementedError("Concrete solvers must implement step()")
