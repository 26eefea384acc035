'''
@date: 5 Oct 2017
@brief: tests for 3D panel method with wakes and time-marching solver
@note: wings are coarse to keep the tests fast.
'''
import os, sys
sys.path.append(os.path.join(os.path.dirname(os.path.abspath(__file__)),'..'))

import numpy  as np

import upm3d_dyn as upm
import geo
import analytical as an
import set_dyn
from body import Body
from parameters import Parameters

import unittest



class Test_dyn(unittest.TestCase):
	'''
	Each method defined in this class contains a test case.
	@warning: by default, only functions whose name starts with 'test' is run.
	'''

	def setUp(self):
		''' Common piece of code to initialise the test '''

		self.TOL_zero=1e-14		  # assess zero values
		self.TOL_analytical=0.5   # assess accuracy of code
		self.TOL_numerical=1e-8   # assess changes between code versions

		self.alpha=5.*np.pi/180.
		self.Uinf=np.array([1.,0.,0.])


	def build_wing_solver(self,par=None,Nchord=4,Nspan=4,span=4.):
		S=upm.Solver(par=par)
		S._verbose=False
		B=Body('wing')
		B.add_lifting_surface(geo.build_wing(1.,span,Nchord,Nspan,self.alpha))
		S.add_body(B)
		S.set_freestream_velocity(self.Uinf)
		S.set_fluid_density(1.)
		return S, B


	def check_kutta(self,S,B):
		d=B.lifting_surfaces[0]
		ls=d.lifting_surface
		off=S.surface_offset[ls.id]
		Mnew=ls.n_spanwise_panels()
		wake_offset=d.wake.n_panels()-Mnew
		for jj in range(Mnew):
			mu_exp=S.doublet_coefficients[off+ls.trailing_edge_upper_panel(jj)]-\
			       S.doublet_coefficients[off+ls.trailing_edge_lower_panel(jj)]
			self.assertEqual(d.wake.doublet_coefficients[wake_offset+jj],mu_exp)


	def test_kutta(self):
		'''
		Newest wake row carries the jump of doublet at the trailing edge,
		older rows are not modified.
		'''

		dt=0.1
		S,B=self.build_wing_solver()
		S.initialize_wakes(dt)
		self.assertTrue(S.solve(dt))
		self.check_kutta(S,B)

		d=B.lifting_surfaces[0]
		mu_row0=d.wake.doublet_coefficients.copy()
		S.update_wakes(dt)
		self.assertTrue(S.solve(dt))
		self.check_kutta(S,B)
		self.assertTrue(np.array_equal(
			           d.wake.doublet_coefficients[:len(mu_row0)],mu_row0))

		# positive lift: potential on upper surface exceeds the lower one
		self.assertTrue(np.all(mu_row0<0.))


	def test_wake_convection(self):
		'''
		Wake nodes are convected with the velocities sampled before any node is
		moved. The newest row is emitted from the trailing edge and a new row
		is attached to it.
		'''

		dt=0.1
		S,B=self.build_wing_solver()
		S.initialize_wakes(dt)
		d=B.lifting_surfaces[0]
		ls=d.lifting_surface
		Ns=ls.n_spanwise_nodes()
		Xte=ls.nodes[[ls.trailing_edge_node(kk) for kk in range(Ns)],:]

		# first row emitted along the bisector
		self.assertEqual(d.wake.n_rows(),1)
		self.assertTrue(np.allclose(d.wake.nodes[Ns:],Xte,atol=self.TOL_zero))
		for kk in range(Ns):
			disp=d.wake.nodes[kk]-Xte[kk]
			disp_exp=S.par.wake_emission_distance_factor*dt*\
			                           ls.trailing_edge_bisector(kk)
			self.assertTrue(np.allclose(disp,disp_exp,atol=self.TOL_zero))
			self.assertTrue(disp[0]>0.)

		for nn in range(3):
			self.assertTrue(S.solve(dt))
			Nodes0=d.wake.nodes.copy()
			V0=S.velocity(Nodes0)
			K0=Nodes0.shape[0]-Ns
			S.update_wakes(dt)

			self.assertEqual(d.wake.n_rows(),nn+2)
			self.assertEqual(d.wake.n_panels(),(nn+2)*ls.n_spanwise_panels())
			self.assertEqual(len(d.wake.doublet_coefficients),d.wake.n_panels())
			self.assertTrue(np.allclose(d.wake.nodes[:K0],
				                   Nodes0[:K0]+V0[:K0]*dt,atol=self.TOL_numerical))
			self.assertTrue(np.allclose(d.wake.nodes[-Ns:],Xte,atol=self.TOL_zero))
			self.assertEqual(len(d.wake.row_age),nn+2)


	def test_static_wake(self):
		'''
		With no wake convection, the wake only depends on the current trailing
		edge position and on the static wake length.
		'''

		Lw=20.
		dt=0.1
		S,B=self.build_wing_solver(par=Parameters(convect_wake=False,
			                                              static_wake_length=Lw))
		d=B.lifting_surfaces[0]
		ls=d.lifting_surface
		Ns=ls.n_spanwise_nodes()

		def expected_wake():
			Xte=ls.nodes[[ls.trailing_edge_node(kk) for kk in range(Ns)],:]
			return np.concatenate([Xte+Lw*np.array([1.,0.,0.]),Xte],axis=0)

		S.initialize_wakes(dt)
		self.assertTrue(np.allclose(d.wake.nodes,expected_wake(),
			                                           atol=self.TOL_numerical))

		self.assertTrue(S.solve(dt))
		S.update_wakes(dt)
		self.assertEqual(d.wake.n_rows(),1)
		self.assertTrue(np.allclose(d.wake.nodes,expected_wake(),
			                                           atol=self.TOL_numerical))

		# corrupt wake history, then move the body
		d.wake.nodes[:]+=np.random.rand(*d.wake.nodes.shape)
		B.set_position([0.,0.,0.3])
		S.update_wakes(dt)
		self.assertTrue(np.allclose(d.wake.nodes,expected_wake(),
			                                           atol=self.TOL_numerical))
		self.assertTrue(np.allclose(d.wake.nodes[Ns:,2],
			                    ls.nodes[::ls.n_chordwise_nodes(),2],atol=1e-12))


	def test_static_repeat(self):
		'''
		With a static wake and no unsteady Bernoulli term, repeated solutions
		with identical inputs give the same result.
		'''

		dt=0.1
		S,B=self.build_wing_solver(par=Parameters(convect_wake=False,
			                                           unsteady_bernoulli=False))
		S.initialize_wakes(dt)

		Res=[]
		for nn in range(2):
			self.assertTrue(S.solve(dt))
			Res.append([S.doublet_coefficients.copy(),
				        S.source_coefficients.copy(),
				        S.pressure_coefficients.copy(),
				        B.lifting_surfaces[0].wake.doublet_coefficients.copy()])

		for v1,v2 in zip(Res[0],Res[1]):
			self.assertTrue(np.allclose(v1,v2,rtol=0.,atol=self.TOL_numerical))
		# source coefficients do not depend on the solution
		self.assertTrue(np.array_equal(Res[0][1],Res[1][1]))


	def test_wing_lift(self):
		'''
		Rectangular wing with static wake: lift coefficient is positive and
		below the 2D thin aerofoil value.
		'''

		S,B=self.build_wing_solver(par=Parameters(convect_wake=False,
			                                          unsteady_bernoulli=False),
		                           Nchord=8,Nspan=6,span=6.)
		S.initialize_wakes(0.1)
		self.assertTrue(S.solve())

		qinf=0.5*S.fluid_density*np.dot(self.Uinf,self.Uinf)
		Sref=6.
		F=S.force(B)
		CL=F[2]/qinf/Sref

		CLmax=an.lift_slope_thin_aerofoil()*self.alpha
		CLref=an.lift_slope_helmbold(6.)*self.alpha
		self.assertTrue(CL>0. and CL<CLmax, msg='CL=%.4f out of bounds!'%CL)
		self.assertTrue(np.abs(CL/CLref-1.)<self.TOL_analytical,
			                msg='CL=%.4f vs %.4f expected!'%(CL,CLref))
		# no side force by symmetry
		self.assertTrue(np.abs(F[1])<1e-6*np.abs(F[2]))


	def test_wing_lift_elliptic(self):
		'''
		Elliptic wing with static wake: lift coefficient compared to lifting
		line theory.
		'''

		span,chord=6.,1.
		S=upm.Solver(par=Parameters(convect_wake=False,unsteady_bernoulli=False))
		S._verbose=False
		B=Body('wing')
		B.add_lifting_surface(geo.build_wing(chord,span,4,8,self.alpha,
			                                             planform='elliptic'))
		S.add_body(B)
		S.set_freestream_velocity(self.Uinf)
		S.set_fluid_density(1.)
		S.initialize_wakes(0.1)
		self.assertTrue(S.solve())

		Sref=geo.planform_area(geo.build_wing(chord,span,4,8,
			                                             planform='elliptic'))
		self.assertTrue(Sref<0.25*np.pi*span*chord)
		AR=span**2/Sref

		qinf=0.5*S.fluid_density*np.dot(self.Uinf,self.Uinf)
		F=S.force(B)
		CL=F[2]/qinf/Sref

		CLmax=an.lift_slope_thin_aerofoil()*self.alpha
		CLref=an.lift_slope_elliptic(AR)*self.alpha
		self.assertTrue(CL>0. and CL<CLmax, msg='CL=%.4f out of bounds!'%CL)
		self.assertTrue(np.abs(CL/CLref-1.)<self.TOL_analytical,
			                msg='CL=%.4f vs %.4f expected!'%(CL,CLref))
		self.assertTrue(np.abs(F[1])<1e-6*np.abs(F[2]))


	def test_emission_apparent_velocity(self):
		'''
		Newest wake row emitted against the apparent velocity of the trailing
		edge, instead of along the bisector.
		'''

		dt=0.1
		S,B=self.build_wing_solver(par=Parameters(
			                               wake_emission_follow_bisector=False))
		d=B.lifting_surfaces[0]
		ls=d.lifting_surface
		Ns=ls.n_spanwise_nodes()
		fact=S.par.wake_emission_distance_factor

		S.initialize_wakes(dt)
		Xte=ls.nodes[[ls.trailing_edge_node(kk) for kk in range(Ns)],:]
		self.assertTrue(np.allclose(d.wake.nodes[:Ns]-Xte,fact*dt*self.Uinf,
			                                                atol=self.TOL_zero))

		# moving body: apparent velocity includes the body velocity
		Vbody=np.array([0.,0.,0.5])
		B.set_velocity(Vbody)
		self.assertTrue(S.solve(dt))
		S.update_wakes(dt)
		self.assertTrue(np.allclose(d.wake.nodes[-2*Ns:-Ns]-Xte,
			               fact*dt*(self.Uinf-Vbody),atol=self.TOL_zero))
		self.assertTrue(np.allclose(d.wake.nodes[-Ns:],Xte,atol=self.TOL_zero))


	def test_parallel(self):
		'''
		Influence matrices and wake velocities computed over a pool of
		processes give the same solution as the serial computation.
		'''

		dt=0.1
		Res=[]
		for parallel in [False,True]:
			S,B=self.build_wing_solver()
			S.parallel=parallel
			S.PROCESSORS=2
			S.initialize_wakes(dt)
			for nn in range(2):
				self.assertTrue(S.solve(dt))
				S.update_wakes(dt)
			d=B.lifting_surfaces[0]
			Res.append([S.doublet_coefficients.copy(),
				        d.wake.doublet_coefficients.copy(),
				        d.wake.nodes.copy()])

		for v1,v2 in zip(Res[0],Res[1]):
			self.assertEqual(v1.shape,v2.shape)
			self.assertTrue(np.allclose(v1,v2,rtol=0.,atol=1e-12))


	def test_solve_dyn_no_wakes(self):
		''' Time-marching with non-lifting bodies only: no wake to convect '''

		S=upm.Solver()
		S._verbose=False
		B=Body('sphere')
		B.add_non_lifting_surface(geo.build_sphere(1.,6,8))
		S.add_body(B)
		S.set_freestream_velocity(self.Uinf)
		S.set_fluid_density(1.)

		self.assertTrue(S.solve_dyn(0.2,0.1))
		self.assertEqual(S.NT,2)
		self.assertEqual(S.THforce.shape,(2,1,3))
		self.assertTrue(np.all(np.isfinite(S.THforce)))
		# steady problem: same loads at both steps
		self.assertTrue(np.allclose(S.THforce[1],S.THforce[0],atol=1e-6))


	def test_initialize_twice(self):
		S,B=self.build_wing_solver()
		S.initialize_wakes(0.1)
		with self.assertRaises(NameError):
			S.initialize_wakes(0.1)


	def test_solve_dyn_plunge(self):
		''' Time-marching solution of plunging wing '''

		dt,T=0.1,0.5
		f0,H=0.5,0.005
		S,B=self.build_wing_solver()
		motion=set_dyn.plunge(B,f0,H)

		self.assertTrue(S.solve_dyn(T,dt,motion))

		self.assertEqual(S.NT,5)
		self.assertEqual(S.THforce.shape,(5,1,3))
		self.assertEqual(S.THmoment.shape,(5,1,3))
		self.assertTrue(np.all(np.isfinite(S.THforce)))
		self.assertTrue(np.all(S.THforce[:,0,2]>0.))
		self.assertEqual(B.lifting_surfaces[0].wake.n_rows(),1+S.NT)

		zexp=H*(1.-np.cos(2.*np.pi*f0*S.time[-1]))
		self.assertAlmostEqual(B.position[2],zexp,delta=self.TOL_zero)
		self.assertAlmostEqual(B.velocity[2],
			       2.*np.pi*f0*H*np.sin(2.*np.pi*f0*S.time[-1]),delta=self.TOL_zero)

		# unsteady Bernoulli term at steps after the first
		self.assertTrue(np.any(S.previous_surface_velocity_potentials!=0.))


	def test_solve_dyn_pitch(self):
		''' Pitching wing: attitude and rotational velocity are prescribed '''

		dt,T=0.1,0.3
		f0,A=0.5,2.*np.pi/180.
		S,B=self.build_wing_solver()
		motion=set_dyn.pitch(B,f0,A)

		self.assertTrue(S.solve_dyn(T,dt,motion))
		aexp=A*np.sin(2.*np.pi*f0*S.time[-1])
		self.assertTrue(np.allclose(B.attitude.as_rotvec(),[0.,aexp,0.],
			                                                       atol=1e-12))
		self.assertTrue(np.all(np.isfinite(S.THmoment)))



if __name__=='__main__':

	unittest.main()
