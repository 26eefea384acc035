'''
3D unsteady panel method - time marching
date: 2 Oct 2017

Wake initialisation and convection, and a driver for time-domain simulations
with prescribed kinematics.

If par.convect_wake, the wakes are free: at each time-step the wake nodes
are convected with the local flow velocity (explicit Euler) and a new row of
panels is shed from the trailing edge. Otherwise the wake is made of a single
row of panels of length par.static_wake_length, rebuilt at each step from the
current trailing edge position.

Ref.[1]: Katz and Plotkin, Low speed aerodynamics, sec. 13.12
'''

import time
import warnings
import numpy as np
import multiprocessing as mpr

import upm3d_sta
import save


class Solver(upm3d_sta.Solver):
	'''
	Inherit methods of static solver
	'''

	def __init__(self,log_folder='./res/',par=None):

		super().__init__(log_folder,par)

		# time-stepping
		self.dt=None
		self.T=None
		self.time=np.zeros((0,))
		self.NT=0

		# time histories: one row per time-step, one column per body
		self.THforce=np.zeros((0,0,3))
		self.THmoment=np.zeros((0,0,3))

		# flags
		self._wakes_initialised=False


	def compute_trailing_edge_vortex_displacement(self,body,lifting_surface,
		                                                             index,dt):
		'''
		Displacement of the wake node attached to the index-th trailing edge
		node over a time-step. The node is emitted along the trailing edge
		bisector, if par.wake_emission_follow_bisector, or against the local
		apparent velocity otherwise.
		'''

		Vapp=body.node_kinematic_velocity(lifting_surface,
			         lifting_surface.trailing_edge_node(index))-self.freestream_velocity

		if self.par.wake_emission_follow_bisector:
			Vwake=np.linalg.norm(Vapp)*lifting_surface.trailing_edge_bisector(index)
		else:
			Vwake=-Vapp

		return self.par.wake_emission_distance_factor*Vwake*dt


	def _static_wake_direction(self,body,lifting_surface):
		'''
		Unit vector along which the static wake trails. If the body does not
		move relative to the free stream, the trailing edge bisector at mid
		span is used.
		'''

		Vapp=body.velocity-self.freestream_velocity
		vnorm=np.linalg.norm(Vapp)
		if vnorm>0.:
			return -Vapp/vnorm
		return lifting_surface.trailing_edge_bisector(
			                            lifting_surface.n_spanwise_nodes()//2)


	def initialize_wakes(self,dt):
		'''
		Add the first row of wake panels to all lifting surfaces. The
		downstream nodes are emitted from the trailing edge (convected wake) or
		placed at par.static_wake_length from it (static wake).
		'''

		if self._wakes_initialised:
			raise NameError('Wakes already initialised!')

		for body,d,off in self._lifting_surfaces():
			ls=d.lifting_surface

			d.wake.add_layer()
			if self.par.convect_wake:
				for kk in range(ls.n_spanwise_nodes()):
					d.wake.nodes[kk,:]+=\
					self.compute_trailing_edge_vortex_displacement(body,ls,kk,dt)
			else:
				dirw=self._static_wake_direction(body,ls)
				d.wake.nodes[:ls.n_spanwise_nodes(),:]+=\
				                             self.par.static_wake_length*dirw
			d.wake.add_layer()

		self._wakes_initialised=True


	def update_wakes(self,dt):
		'''
		Convect (or re-position) the wakes after a solution.

		In the convected case, the velocity at all wake nodes is computed
		before any node is moved. The newest row is then emitted from the
		trailing edge, all other nodes move with the local flow velocity and a
		new row is attached to the trailing edge.
		'''

		if self.par.convect_wake:
			self._print('Convecting wakes.')

			### sample velocities at all wake nodes
			Data=list(self._lifting_surfaces())
			if len(Data)==0:
				return
			Nodes=[d.wake.nodes.copy() for body,d,off in Data]
			Kw=np.cumsum([0]+[nn.shape[0] for nn in Nodes])
			Xall=np.concatenate(Nodes,axis=0)

			if self.parallel:
				pool=mpr.Pool(processes=self.PROCESSORS)
				try:
					Vall=self._velocity_parall(Xall,pool)
				finally:
					pool.close()
					pool.join()
			else:
				Vall=self.velocity(Xall)

			### move nodes
			for ww,(body,d,off) in enumerate(Data):
				ls=d.lifting_surface
				Ns=ls.n_spanwise_nodes()
				K0=d.wake.n_nodes()-Ns
				Vwake=Vall[Kw[ww]:Kw[ww+1],:]

				# newest row: emitted from trailing edge
				for kk in range(Ns):
					d.wake.nodes[K0+kk,:]+=\
					self.compute_trailing_edge_vortex_displacement(body,ls,kk,dt)

				# other nodes: explicit Euler
				d.wake.nodes[:K0,:]+=Vwake[:K0,:]*dt

				d.wake.update_properties(dt)
				d.wake.add_layer()

		else:
			self._print('Re-positioning wakes.')

			for body,d,off in self._lifting_surfaces():
				ls=d.lifting_surface
				Ns=ls.n_spanwise_nodes()
				dirw=self._static_wake_direction(body,ls)
				for kk in range(Ns):
					xte=ls.nodes[ls.trailing_edge_node(kk),:]
					d.wake.nodes[Ns+kk,:]=xte
					d.wake.nodes[kk,:]=xte+self.par.static_wake_length*dirw
				d.wake.compute_geometry()


	def solve_dyn(self,T,dt,kinematics=None,writer=None):
		'''
		Time-marching solution over [0,T) with time-step dt.

		kinematics: callable of time, setting position, attitude and
		velocities of the bodies at each time-step (see set_dyn).
		writer: if given, the solution is logged at each time-step.

		Forces and moments (about each body position) are stored in THforce
		and THmoment. At the first time-step the unsteady Bernoulli term is
		not included, as no previous solution is available.

		Returns False if the solution failed at any time-step. The time
		histories are retained up to the last successful step.
		'''

		start_time=time.time()

		self.dt=dt
		self.T=T
		self.time=np.arange(0.,T,dt)
		self.NT=len(self.time)
		Nb=len(self.bodies)
		self.THforce=np.zeros((self.NT,Nb,3))
		self.THmoment=np.zeros((self.NT,Nb,3))

		if kinematics is not None:
			kinematics(self.time[0])
		if not self._wakes_initialised:
			self.initialize_wakes(dt)

		for tt in range(self.NT):
			if kinematics is not None and tt>0:
				kinematics(self.time[tt])

			if tt==0:
				success=self.solve(0.0)
			else:
				success=self.solve(dt)

			if not success:
				warnings.warn('Solver: time-step %d (t=%.3e s) failed!'
					                                         %(tt,self.time[tt]))
				self.NT=tt
				self.time=self.time[:tt]
				self.THforce=self.THforce[:tt]
				self.THmoment=self.THmoment[:tt]
				return False

			for bb,body in enumerate(self.bodies):
				self.THforce[tt,bb,:]=self.force(body)
				self.THmoment[tt,bb,:]=self.moment(body,body.position)

			if writer is not None:
				self.log(tt,writer)

			self.update_wakes(dt)
			self._print('Time-step %.4d of %.4d completed.'%(tt+1,self.NT))

		self._exec_time=time.time()-start_time
		self._print('Done in %.1f sec!'%self._exec_time)

		return True


	def _save_extra(self):
		return [save.Output('dynamics').drop(
			                          dt=self.dt,T=self.T,time=self.time,
			                          THforce=self.THforce,THmoment=self.THmoment)]
