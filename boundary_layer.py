'''
3D unsteady panel method
date: 2 Oct 2017

Boundary layer models, one instance per surface. A boundary layer feeds back
into the inviscid solution through a blowing velocity (mass transfer) and
contributes a friction force per panel.
'''

import numpy as np


class BoundaryLayer():
	'''
	Base class. Derived classes need to implement recalculate, blowing_velocity
	and friction.
	'''

	def is_passive(self):
		'''
		True if the model never feeds back into the inviscid solution. If all
		boundary layers of a solver are passive, no iteration is required.
		'''
		return False


	def recalculate(self,surface_velocities):
		'''
		Solve boundary layer equations given the (M,3) surface velocities of
		the surface panels.
		'''
		raise NotImplementedError('recalculate not implemented!')


	def blowing_velocity(self,panel):
		raise NotImplementedError('blowing_velocity not implemented!')


	def friction(self,panel):
		raise NotImplementedError('friction not implemented!')



class DummyBoundaryLayer(BoundaryLayer):
	'''
	No boundary layer: zero blowing velocity and friction.
	'''

	def is_passive(self):
		return True


	def recalculate(self,surface_velocities):
		pass


	def blowing_velocity(self,panel):
		return 0.0


	def friction(self,panel):
		return np.zeros((3,))
