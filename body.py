'''
3D unsteady panel method
date: 2 Oct 2017

Bodies: a collection of non-lifting and lifting surfaces moving rigidly.
Each lifting surface is paired with its wake.
'''

import numpy as np
from scipy.spatial.transform import Rotation

from wake import Wake
from boundary_layer import DummyBoundaryLayer


class SurfaceData():
	''' Non-lifting surface and its boundary layer '''

	def __init__(self,surface,boundary_layer):
		self.surface=surface
		self.boundary_layer=boundary_layer



class LiftingSurfaceData(SurfaceData):
	''' Lifting surface, its boundary layer and wake '''

	def __init__(self,lifting_surface,wake,boundary_layer):
		super().__init__(lifting_surface,boundary_layer)
		self.lifting_surface=lifting_surface
		self.wake=wake



class Body():
	'''
	Rigid body. Kinematics are defined by the position of the reference point,
	the attitude, the linear velocity of the reference point and the
	rotational velocity (global frame).
	'''

	def __init__(self,id='body'):

		self.id=id
		self.non_lifting_surfaces=[]
		self.lifting_surfaces=[]

		self.position=np.zeros((3,))
		self.attitude=Rotation.identity()
		self.velocity=np.zeros((3,))
		self.rotational_velocity=np.zeros((3,))


	def add_non_lifting_surface(self,surface,boundary_layer=None):
		if boundary_layer is None:
			boundary_layer=DummyBoundaryLayer()
		self.non_lifting_surfaces.append(SurfaceData(surface,boundary_layer))

		return self


	def add_lifting_surface(self,lifting_surface,wake=None,boundary_layer=None):
		if wake is None:
			wake=Wake(lifting_surface)
		if boundary_layer is None:
			boundary_layer=DummyBoundaryLayer()
		self.lifting_surfaces.append(
					LiftingSurfaceData(lifting_surface,wake,boundary_layer))

		return self


	def surfaces(self):
		''' All surfaces data, non-lifting first '''
		return self.non_lifting_surfaces+self.lifting_surfaces


	# ------------------------------------------------------------ kinematics

	def set_position(self,position):
		'''
		Translate the body to position. The wake newest row follows the
		trailing edge.
		'''

		position=np.asarray(position,dtype=float)
		dx=position-self.position
		for d in self.non_lifting_surfaces:
			d.surface.translate(dx)
		for d in self.lifting_surfaces:
			d.lifting_surface.translate(dx)
			d.wake.translate_trailing_edge()
		self.position=position


	def set_attitude(self,attitude):
		'''
		Rotate the body about its reference point to attitude (a
		scipy.spatial.transform.Rotation).
		'''

		Rot=(attitude*self.attitude.inv()).as_matrix()
		for d in self.non_lifting_surfaces:
			d.surface.rotate(Rot,self.position)
		for d in self.lifting_surfaces:
			d.lifting_surface.rotate(Rot,self.position)
			d.wake.translate_trailing_edge()
		self.attitude=attitude


	def set_velocity(self,velocity):
		self.velocity=np.asarray(velocity,dtype=float)


	def set_rotational_velocity(self,rotational_velocity):
		self.rotational_velocity=np.asarray(rotational_velocity,dtype=float)


	def panel_kinematic_velocities(self,surface):
		''' Kinematic velocity at all collocation points of surface (M,3) '''

		R=surface.Cmat-self.position
		return self.velocity+np.cross(self.rotational_velocity,R)


	def panel_kinematic_velocity(self,surface,panel):
		R=surface.Cmat[panel,:]-self.position
		return self.velocity+np.cross(self.rotational_velocity,R)


	def node_kinematic_velocity(self,surface,node):
		R=surface.nodes[node,:]-self.position
		return self.velocity+np.cross(self.rotational_velocity,R)
